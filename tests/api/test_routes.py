"""HTTP adapter tests through the FastAPI test client."""
import asyncio
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from dam_dispatch.api.dependencies import get_cancellation, watch_disconnect
from dam_dispatch.application.cancellation import CancellationToken
from dam_dispatch.bootstrap import Application
from dam_dispatch.config.manager import ConfigurationManager
from dam_dispatch.infrastructure.persistence import InMemoryInvoiceRepository

from conftest import FakeClock, RecordingSleep, make_invoice


@pytest.fixture
def application():
    repository = InMemoryInvoiceRepository()
    for day in (1, 2, 3):
        repository.add(make_invoice(day, "10.00"))
    clock = FakeClock()
    return Application(
        config_manager=ConfigurationManager(environ={}),
        invoice_repository=repository,
        sleep=RecordingSleep(clock),
        clock=clock,
        configure_logging=False,
    )


@pytest.fixture
def app(application):
    return application.create_app()


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client



class TestInvoiceRoutes:
    """Invoice endpoints."""

    def test_list_invoices(self, client):
        response = client.get("/invoices", params={"page_number": 1, "page_size": 10})
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["total_count"] == 3
        assert len(body["data"]["items"]) == 3
        assert "X-Request-ID" in response.headers

    def test_validation_failure_is_400(self, client):
        response = client.get("/invoices", params={"page_number": 0})
        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["errors"] == ["La página debe ser mayor o igual a 1."]

    def test_get_invoice(self, client):
        response = client.get("/invoices/1")
        assert response.status_code == 200
        assert response.json()["data"]["id"] == 1

    def test_missing_invoice_is_404(self, client):
        response = client.get("/invoices/42")
        assert response.status_code == 404
        assert response.json()["errors"] == ["No se encontró factura con ID: 42"]

    def test_equal_amounts_share_one_cache_entry(self, client, application):
        first = client.get("/invoices", params={"min_amount": "10"})
        second = client.get("/invoices", params={"min_amount": "10.00"})
        assert first.json()["data"] == second.json()["data"]
        assert len(application.cache) == 1


class TestPresenceRoutes:
    """Presence endpoints."""

    def test_create_presence(self, client):
        response = client.post(
            "/presences",
            json={
                "serial_number": "SN-7",
                "timestamp": "2024-05-01T10:00:00Z",
                "device_activity_id": 3,
            },
        )
        assert response.status_code == 201
        presence_id = response.json()["data"]

        fetched = client.get(f"/presences/{presence_id}")
        assert fetched.status_code == 200
        assert fetched.json()["data"]["serial_number"] == "SN-7"

    def test_create_presence_reports_every_violation(self, client):
        response = client.post("/presences", json={})
        assert response.status_code == 400
        assert response.json()["errors"] == [
            "El Serial Number es obligatorio.",
            "La fecha y hora de presencia es obligatoria.",
            "Se requiere un ID de actividad de dispositivo válido.",
        ]

    def test_list_presences_by_activity(self, client):
        client.post(
            "/presences",
            json={"serial_number": "A", "timestamp": "2024-05-01T10:00:00Z", "device_activity_id": 1},
        )
        client.post(
            "/presences",
            json={"serial_number": "B", "timestamp": "2024-05-01T11:00:00Z", "device_activity_id": 2},
        )
        response = client.get("/presences", params={"activity_id": 2})
        assert response.status_code == 200
        items = response.json()["data"]["items"]
        assert [item["serial_number"] for item in items] == ["B"]

    def test_health(self, client):
        assert client.get("/health").json()["status"] == "healthy"


class DisconnectingRequest:
    """Request double that reports a disconnect after ``connected_polls`` checks."""

    def __init__(self, connected_polls: int):
        self.connected_polls = connected_polls
        self.polls = 0
        self.url = SimpleNamespace(path="/invoices")

    async def is_disconnected(self) -> bool:
        self.polls += 1
        return self.polls > self.connected_polls


class TestCancellation:
    """Requests abandoned by the client."""

    def test_cancelled_request_is_499(self, app):
        def cancelled_token():
            token = CancellationToken()
            token.cancel()
            return token

        app.dependency_overrides[get_cancellation] = cancelled_token
        with TestClient(app) as test_client:
            for path in ("/invoices", "/invoices/1", "/presences", "/presences/1"):
                response = test_client.get(path)
                assert response.status_code == 499
                assert response.json()["error_code"] == "CANCELED"
            response = test_client.post(
                "/presences",
                json={"serial_number": "SN-1", "timestamp": "2024-05-01T10:00:00Z", "device_activity_id": 1},
            )
            assert response.status_code == 499

    @pytest.mark.asyncio
    async def test_disconnect_cancels_token(self):
        request = DisconnectingRequest(connected_polls=2)
        token = CancellationToken()

        await asyncio.wait_for(watch_disconnect(request, token, interval=0), timeout=1)

        assert token.is_cancelled
        assert request.polls == 3

    @pytest.mark.asyncio
    async def test_token_stays_live_while_connected(self):
        request = DisconnectingRequest(connected_polls=10 ** 6)
        dependency = get_cancellation(request)

        token = await dependency.__anext__()
        await asyncio.sleep(0)
        assert token.is_cancelled is False

        with pytest.raises(StopAsyncIteration):
            await dependency.__anext__()
        assert token.is_cancelled is False

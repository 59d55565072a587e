"""HTTP server configuration schema."""
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class CORSConfig(BaseModel):
    """CORS configuration."""

    enabled: bool = Field(False, description="Enable CORS")
    origins: List[str] = Field(["*"], description="Allowed origins")
    methods: List[str] = Field(["GET", "POST"], description="Allowed methods")
    headers: List[str] = Field(["*"], description="Allowed headers")


class ServerConfig(BaseModel):
    """HTTP server configuration."""
    model_config = ConfigDict(extra="forbid")

    host: str = Field("0.0.0.0", description="Server host")
    port: int = Field(8000, description="Server port")
    log_level: str = Field("info", description="Server log level")
    access_log: bool = Field(True, description="Enable access logging")
    cors: CORSConfig = Field(default_factory=lambda: CORSConfig())

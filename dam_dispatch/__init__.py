"""DAM Dispatch - Root Package.

The business layer of the DAM backend is reached through a single
request-dispatch pipeline. Every read (query) or write (command) is wrapped
in an immutable message and routed through the dispatcher, which applies
validation, result caching and retry before invoking the handler bound to
the message type.

Key Components:
    - api: FastAPI adapter that maps envelopes to HTTP responses
    - application: Messages, handlers, validation rules and response DTOs
    - domain: Entities, repository ports and domain exceptions
    - infrastructure: Dispatcher, cache store, retry policy, logging
    - config: Configuration schemas and loading
"""

from ._version import __version__

__all__ = ["__version__"]

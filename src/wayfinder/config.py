"""Application configuration.

AppConfig is a frozen dataclass, so a running app never sees its settings
change underneath it.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, port=3000)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    workers: int = 1
    log_level: str = "info"

    # Scheme assumed when the ASGI server doesn't report one
    default_scheme: str = "http"

    # Body sent when the dispatcher declines and no fallback app is mounted
    not_found_body: str = "Not Found"

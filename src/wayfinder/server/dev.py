"""Serving a live App with pounce.

Pounce's ``run()`` takes an import string (e.g. ``"myapp:app"``), but
wayfinder has a live ``App`` object, so this uses ``pounce.Server``
directly with the ASGI callable.
"""


def run_server(
    app: object,
    host: str,
    port: int,
    *,
    workers: int = 1,
    reload: bool = False,
    log_level: str = "info",
) -> None:
    """Start a pounce server for *app*.

    Requires the ``server`` extra (``pip install wayfinder[server]``).
    """
    try:
        from pounce.config import ServerConfig
        from pounce.server import Server
    except ImportError as exc:
        msg = "Serving requires pounce. Install it with: pip install wayfinder[server]"
        raise RuntimeError(msg) from exc

    config = ServerConfig(
        host=host,
        port=port,
        workers=workers,
        reload=reload,
        log_level=log_level,
    )
    Server(config, app).run()

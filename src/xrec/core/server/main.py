"""Server entry point: ``xrec-server`` or ``python -m xrec.core.server.main``.

MCP clients normally launch the recommender as a subprocess and speak to it
over stdio. Streamable HTTP is available for a shared instance and stays on
loopback unless ``XREC_ALLOW_INSECURE_BIND`` is set.
"""

from __future__ import annotations

import logging
import sys
from ipaddress import ip_address

from xrec.core.config.settings import HTTP_TRANSPORT, Settings, get_settings
from xrec.core.server.app import create_app

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def is_loopback_host(host: str) -> bool:
    if host == "localhost":
        return True
    try:
        return ip_address(host).is_loopback
    except ValueError:
        return False


def check_bind_address(settings: Settings) -> None:
    """Reject a public HTTP bind unless explicitly allowed. Stdio never binds."""
    if settings.xrec_transport != HTTP_TRANSPORT:
        return
    if settings.xrec_allow_insecure_bind or is_loopback_host(settings.xrec_host):
        return
    raise RuntimeError(
        f"Refusing to serve HTTP on non-loopback host {settings.xrec_host!r}: "
        "the recommender has no auth layer. "
        "Set XREC_ALLOW_INSECURE_BIND=true to override (unsafe)."
    )


def configure_logging(level: str) -> None:
    # stdout carries the MCP stream under stdio
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, stream=sys.stderr)


def run() -> None:
    """Start the recommender on the configured transport."""
    settings = get_settings()
    configure_logging(settings.xrec_log_level)
    check_bind_address(settings)

    mcp = create_app()
    if settings.xrec_transport == HTTP_TRANSPORT:
        logger.info(
            "Starting Extension Recommender on http://%s:%d/mcp",
            settings.xrec_host,
            settings.xrec_port,
        )
        mcp.run(transport=HTTP_TRANSPORT, host=settings.xrec_host, port=settings.xrec_port)
    else:
        logger.info("Starting Extension Recommender on stdio")
        mcp.run(transport="stdio")


if __name__ == "__main__":
    run()

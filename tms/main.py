"""
TMS backend - main entry point.

Starts the HTTP API with uvicorn on the configured host and port.
"""

from __future__ import annotations

import logging

import uvicorn

from tms.config import get_settings


def main():
    """Main entry point."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(
        "tms.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug and not settings.is_production,
    )


if __name__ == "__main__":
    main()

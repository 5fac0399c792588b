"""Entry point: ``python -m sms_relay``."""

from __future__ import annotations

import uvicorn

from .app import create_app
from .config import RelayConfig
from .logging import setup_logging


def main() -> None:
    settings = RelayConfig()  # type: ignore[call-arg]
    setup_logging(json=settings.log_json, level=settings.log_level)

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        log_config=None,
    )


if __name__ == "__main__":
    main()

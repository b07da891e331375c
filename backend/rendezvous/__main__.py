"""Run the rendezvous server with uvicorn."""

from __future__ import annotations

import uvicorn

from rendezvous.core.config import load_settings


def main() -> None:
    settings = load_settings()
    uvicorn.run(
        "rendezvous.main:app",
        host=settings.rdv_app_host,
        port=settings.rdv_app_port,
        log_level=settings.rdv_log_level.lower(),
    )


if __name__ == "__main__":
    main()

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Server entry point.

Usage:
    python -m src.main
"""

import uvicorn

from src.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "src.api.app:create_app",
        factory=True,
        host=settings.server.host,
        port=settings.server.port,
        timeout_keep_alive=int(settings.server.read_timeout),
        timeout_graceful_shutdown=int(settings.server.shutdown_timeout),
        log_config=None,
    )


if __name__ == "__main__":
    main()

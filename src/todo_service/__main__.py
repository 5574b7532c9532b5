"""
Run the Todo Service with uvicorn.

Usage:
    python -m todo_service
    todo-service
"""
from __future__ import annotations

import uvicorn

from .logging_config import configure_logging
from .settings import get_settings


def main() -> None:
    """Configure logging and serve todo_service.main:app on HOST:PORT."""
    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(
        "todo_service.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()

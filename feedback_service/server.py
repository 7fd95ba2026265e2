"""
HTTP server entry point.

uvicorn stops accepting connections on SIGINT/SIGTERM and gives in-flight
requests SHUTDOWN_GRACE_SECONDS before cancelling them.
"""

import uvicorn

from feedback_service.core.config import settings
from feedback_service.core.logging import get_logger

log = get_logger("server")


def run():
    log.info(f"Starting the application on {settings.HOST}:{settings.PORT}")
    uvicorn.run(
        "feedback_service.main:app",
        host=settings.HOST,
        port=settings.PORT,
        timeout_graceful_shutdown=settings.SHUTDOWN_GRACE_SECONDS,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()

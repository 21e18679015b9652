import logging

from uvicorn import run as uvicorn_run

from .app import create_app
from .utils import get_settings, setup_logging

logger = logging.getLogger("tiny_tasks")


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level)

    app = create_app(settings=settings)
    logger.info("Tiny Tasks API running on http://%s:%s", settings.host, settings.port)
    logger.info("Try: http://%s:%s/tasks", settings.host, settings.port)
    uvicorn_run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower(), log_config=None)


if __name__ == "__main__":
    main()

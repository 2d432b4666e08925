import logging

from foodtruck.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once; uvicorn's own loggers keep their handlers."""
    root = logging.getLogger()
    if getattr(root, "_foodtruck_configured", False):
        return
    logging.basicConfig(level=(level or settings.log_level).upper(), format=LOG_FORMAT)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    root._foodtruck_configured = True

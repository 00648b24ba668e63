import logging
from wgstatus.config.settings import settings


_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def resolve_level(level_name: str) -> int:
    "'debug' -> logging.DEBUG, unknown names -> logging.INFO"

    level = logging.getLevelName(level_name.strip().upper())
    if isinstance(level, int):
        return level
    return logging.INFO


def _setup_root_logger() -> logging.Logger:
    root = logging.getLogger("wgstatus")
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(resolve_level(settings.LOG_LEVEL))
        # the handler above already prints, don't hand records to the host's root logger too
        root.propagate = False
    return root


def get_logger(name: str) -> logging.Logger:
    _setup_root_logger()
    return logging.getLogger(f"wgstatus.{name}")

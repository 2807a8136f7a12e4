import logging
from typing import Optional

from crossquery.settings import settings as api_settings

_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}

NAMESPACE = "crossquery"

_configured = False


def _level(name: Optional[str]) -> int:
    return _LEVELS.get((name or "").upper(), logging.INFO)


def setup_global_logging(level: str = "INFO") -> None:
    """Configure logging once: root handler format plus the package logger level.

    Args:
        level: Log level name (e.g., "DEBUG", "INFO"); unknown names fall back to INFO
    """
    global _configured
    if _configured:
        return
    lvl = _level(level)
    logging.basicConfig(
        level=lvl,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger(NAMESPACE).setLevel(lvl)
    _configured = True


def get_logger(name: Optional[str] = None) -> "Logger":
    """Return a logger under the ``crossquery`` namespace.

    Args:
        name: Logger name, usually a class or module name
    """
    return Logger(name)


class Logger:
    """Thin wrapper over standard logging used by builders and the engine.

    - Names are placed under the ``crossquery`` namespace, so
      ``Logger("SearchEngine")`` logs as ``crossquery.SearchEngine``.
    - `.message(text)` is used for per-search summaries: it logs at DEBUG
      when LOG_LEVEL is DEBUG, INFO when LOG_LEVEL is INFO (or unset), and
      at the configured level otherwise.
    """

    def __init__(self, name: Optional[str] = None) -> None:
        if not _configured:
            setup_global_logging(api_settings.LOG_LEVEL)
        if not name:
            qualified = NAMESPACE
        elif name == NAMESPACE or name.startswith(NAMESPACE + "."):
            qualified = name
        else:
            qualified = f"{NAMESPACE}.{name}"
        self._logger = logging.getLogger(qualified)

    @property
    def name(self) -> str:
        return self._logger.name

    def debug(self, msg: str, *args, **kwargs) -> None:
        self._logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        self._logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        self._logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        self._logger.error(msg, *args, **kwargs)

    def critical(self, msg: str, *args, **kwargs) -> None:
        self._logger.critical(msg, *args, **kwargs)

    def message(self, msg: str, *args, **kwargs) -> None:
        level = (api_settings.LOG_LEVEL or "").upper()
        if level == "DEBUG":
            self.debug(msg, *args, **kwargs)
        elif level in ("INFO", ""):
            self.info(msg, *args, **kwargs)
        else:
            self._logger.log(_level(level), msg, *args, **kwargs)

import logging
import sys
from typing import Any, Dict, Optional

from tqdm import tqdm


class LogWithTqdm(logging.Handler):
    """
    A logging handler that redirects output to `tqdm.write()`, so log
    messages do not break an active progress bar.
    """
    def emit(self, record):
        try:
            msg = self.format(record)
            tqdm.write(msg, file=sys.stderr)
            self.flush()
        except Exception:
            self.handleError(record)


def _to_level(level: Any, fallback: int) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), fallback)
    return level if isinstance(level, int) else fallback


def configure_logger(general_level='WARNING', module_specific_levels=None, silenced_loggers=None):
    """
    Configures the root logger and specific module loggers with a
    TQDM-friendly handler.
    """
    tqdm_aware_handler = LogWithTqdm()
    formatter = logging.Formatter(
        "%(asctime)s - %(levelname)s - [%(name)s:%(lineno)d] - %(message)s"
    )
    tqdm_aware_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(_to_level(general_level, logging.WARNING))
    root_logger.handlers.clear()
    root_logger.addHandler(tqdm_aware_handler)

    if module_specific_levels:
        for name, level in module_specific_levels.items():
            logging.getLogger(name).setLevel(_to_level(level, logging.INFO))

    if silenced_loggers:
        for name, level in silenced_loggers.items():
            logging.getLogger(name).setLevel(_to_level(level, logging.CRITICAL))


def configure_from_settings(settings: Dict[str, Any], level_override: Optional[str] = None) -> None:
    """Applies the 'logging' section of settings.json."""
    section = settings.get("logging") or {}
    configure_logger(
        general_level=level_override or section.get("level", "WARNING"),
        module_specific_levels=section.get("modules"),
        silenced_loggers=section.get("silenced"),
    )

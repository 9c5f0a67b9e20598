"""Logging setup for entrypoints (API app, Streamlit page).

Library modules only do `logger = logging.getLogger(__name__)`; the
entrypoint calls `setup_logging(...)` once.
"""

import logging

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"

_NOISY = ("urllib3", "watchdog", "matplotlib", "PIL")


def coerce_level(level) -> int:
    """Accept logging.INFO, 20, "info", "20"."""
    if isinstance(level, int):
        return level
    s = str(level).strip().upper()
    if not s:
        raise ValueError("Empty logging level")
    if s.isdigit():
        return int(s)
    value = logging.getLevelName(s)
    if not isinstance(value, int):
        raise ValueError(f"Unknown logging level: {level!r}")
    return value


def setup_logging(level="INFO", *, fmt: str = DEFAULT_FORMAT, datefmt: str = DEFAULT_DATEFMT,
                  quiet_third_party: bool = True) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=fmt, datefmt=datefmt))
    # force=True so reruns (streamlit, notebooks) don't stack handlers
    logging.basicConfig(level=coerce_level(level), handlers=[handler], force=True)

    if quiet_third_party:
        for name in _NOISY:
            logging.getLogger(name).setLevel(logging.WARNING)

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def configure_logging(level: str = "INFO") -> None:
    global _configured
    if _configured:
        logging.getLogger("hr_timeclock").setLevel(level.upper())
        return
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger("hr_timeclock").setLevel(level.upper())
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``hr_timeclock`` namespace."""
    if not name.startswith("hr_timeclock"):
        name = f"hr_timeclock.{name.rsplit('.', 1)[-1]}"
    return logging.getLogger(name)

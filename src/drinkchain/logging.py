"""Process-wide logging setup.

Every record carries the run id of the current process so CLI runs, API
workers and Streamlit sessions can be told apart in a shared log stream.
"""
from __future__ import annotations

import logging
import uuid

from drinkchain.config import settings

_RUN_ID = uuid.uuid4().hex[:8]
_FORMAT = "%(asctime)s %(levelname)s [run=%(run_id)s] %(name)s: %(message)s"


class _RunIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = _RUN_ID
        return True


def get_run_id() -> str:
    """Short identifier of the current process run."""
    return _RUN_ID


def configure_logging(level: str | None = None) -> logging.Logger:
    """Attach a single stream handler to the ``drinkchain`` logger tree."""
    root = logging.getLogger("drinkchain")
    root.setLevel((level or settings.LOG_LEVEL).upper())
    if not any(getattr(h, "_drinkchain", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler.addFilter(_RunIdFilter())
        handler._drinkchain = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    return root


logger = configure_logging()

from __future__ import annotations

import contextvars
import logging
from collections.abc import Iterator
from contextlib import contextmanager

from cadence.config import get_settings


LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] [req=%(request_id)s] %(message)s"

_request_id_ctx: contextvars.ContextVar[str] = contextvars.ContextVar("cadence_request_id", default="-")


class _RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id_ctx.get()
        return True


def current_request_id() -> str:
    return _request_id_ctx.get()


@contextmanager
def request_id_scope(request_id: str) -> Iterator[str]:
    """Tag every log record emitted inside the block with ``request_id``."""
    token = _request_id_ctx.set(request_id)
    try:
        yield request_id
    finally:
        _request_id_ctx.reset(token)


def configure_logging(level: str | None = None) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    handler.addFilter(_RequestIdFilter())
    logging.basicConfig(
        level=(level or get_settings().log_level).upper(),
        handlers=[handler],
        force=True,
    )

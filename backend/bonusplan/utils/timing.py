"""Timing spans for the acquisition and ranking stages."""

import time
from contextlib import contextmanager

from bonusplan.logging import get_logger

logger = get_logger(__name__)

_TIMING_PREFIX = "[TIMING]"


def _format_duration(ms: int) -> str:
    """12500 -> '12.5s', 750 -> '750ms'."""
    if ms >= 1000:
        return f"{ms / 1000:.1f}s"
    return f"{ms}ms"


class Span:
    """Elapsed-time holder yielded by ``time_span``."""

    def __init__(self, name: str):
        self.name = name
        self.started = time.perf_counter()
        self.elapsed_ms: int | None = None

    def finish(self) -> int:
        self.elapsed_ms = int((time.perf_counter() - self.started) * 1000)
        return self.elapsed_ms


@contextmanager
def time_span(name: str, **extra: object):
    """Log how long the wrapped block took, with extra key=value fields.

    The span is logged even when the block raises.
    """
    span = Span(name)
    try:
        yield span
    finally:
        elapsed = span.finish()
        parts = [f"elapsed_ms={elapsed}", f"({_format_duration(elapsed)})"] + [
            f"{k}={v}" for k, v in extra.items()
        ]
        logger.info("%s %s %s", _TIMING_PREFIX, name, " ".join(parts))

"""Output destinations that never survive a failed run half-written."""

from __future__ import annotations

import logging
import signal
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO

from xftmpl.errors import ResourceError

logger = logging.getLogger(__name__)

STDIO_NAME = "-"

_EXIT_SIGNALS = tuple(
    getattr(signal, name) for name in ("SIGTERM", "SIGHUP") if hasattr(signal, name)
)


def _exit_on_signal(signum, frame):
    raise SystemExit(1)


@contextmanager
def _signals_raise_exit() -> Iterator[None]:
    """Turn termination signals into SystemExit so cleanup code runs."""
    if threading.current_thread() is not threading.main_thread():
        yield
        return
    previous = {signum: signal.signal(signum, _exit_on_signal) for signum in _EXIT_SIGNALS}
    try:
        yield
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)


@contextmanager
def output_destination(path: str | Path | None) -> Iterator[BinaryIO]:
    """Yield a binary stream for ``path``, or stdout for None or ``-``.

    A named file is deleted again if the block exits with any exception,
    including KeyboardInterrupt and SIGTERM/SIGHUP.
    """
    if path is None or str(path) == STDIO_NAME:
        stream = sys.stdout.buffer
        try:
            yield stream
            stream.flush()
        except OSError as exc:
            raise ResourceError(f"stdout: {exc.strerror or exc}", cause=exc) from exc
        return

    target = Path(path)
    completed = False
    with _signals_raise_exit():
        try:
            stream = target.open("wb")
        except OSError as exc:
            raise ResourceError(f"{target}: {exc.strerror or exc}", cause=exc) from exc
        try:
            with stream:
                yield stream
            completed = True
        except OSError as exc:
            raise ResourceError(f"{target}: {exc.strerror or exc}", cause=exc) from exc
        finally:
            if not completed:
                target.unlink(missing_ok=True)
                logger.info("removed partial output %s", target)

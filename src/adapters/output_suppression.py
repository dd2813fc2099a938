"""Silence native stdout/stderr chatter.

The Steam API prints diagnostics straight to file descriptors 1 and 2, so
redirecting `sys.stdout` is not enough: the descriptors themselves are
pointed at the null device and restored on exit.
"""

from __future__ import annotations

import os
import sys
from contextlib import contextmanager
from typing import Iterator

_STD_FDS = (1, 2)


def _flush_std_streams() -> None:
    for stream in (sys.stdout, sys.stderr):
        try:
            stream.flush()
        except (AttributeError, OSError, ValueError):
            continue


@contextmanager
def suppress_native_output() -> Iterator[None]:
    """Redirect fds 1 and 2 to the null device for the duration of the block.

    The original descriptors are restored on every exit path, exceptions
    included.
    """

    _flush_std_streams()
    saved: list[tuple[int, int]] = []
    devnull = os.open(os.devnull, os.O_WRONLY)
    try:
        for fd in _STD_FDS:
            saved.append((fd, os.dup(fd)))
            os.dup2(devnull, fd)
        yield
    finally:
        _flush_std_streams()
        for fd, backup in saved:
            os.dup2(backup, fd)
            os.close(backup)
        os.close(devnull)

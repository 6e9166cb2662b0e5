"""Best-effort writes to raw file descriptors."""

import os


def write_ignore_fail(fd: int, data: bytes) -> None:
    """
    Write all of data to fd, giving up silently if the descriptor fails.

    Partial writes are retried with the remaining bytes. A write that
    makes no progress or raises OSError ends the attempt.
    """
    view = memoryview(data)
    while view:
        try:
            written = os.write(fd, view)
        except OSError:
            return
        if written <= 0:
            return
        view = view[written:]

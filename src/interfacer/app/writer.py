import os
import sys
from typing import BinaryIO, Optional

from interfacer.spec import OutputError

STDOUT_SENTINEL = "-"
FILE_PERMISSIONS = 0o644


def write_output(
    destination: str, payload: bytes, stdout: Optional[BinaryIO] = None
) -> None:
    if destination == STDOUT_SENTINEL:
        stream = stdout if stdout is not None else sys.stdout.buffer
        try:
            stream.write(payload)
            stream.flush()
        except OSError as e:
            raise OutputError(f"cannot write to standard output: {e}") from e
        return

    try:
        fd = os.open(
            destination, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_PERMISSIONS
        )
    except OSError as e:
        raise OutputError(f"cannot open '{destination}': {e.strerror}") from e

    try:
        with os.fdopen(fd, "wb") as f:
            written = f.write(payload)
    except OSError as e:
        raise OutputError(f"cannot write '{destination}': {e.strerror}") from e

    if written != len(payload):
        raise OutputError(
            f"short write to '{destination}': {written} of {len(payload)} bytes"
        )

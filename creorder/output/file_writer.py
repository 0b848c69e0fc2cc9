import logging
import os
import shutil
import tempfile

from ..frontend.reorder_error import ReadError, WriteError

logger = logging.getLogger(__name__)

# keep \r\n and undecodable bytes exactly as they were
ENCODING = "utf-8"
ERRORS = "surrogateescape"


def read_text(path: str) -> str:
    try:
        with open(path, "r", encoding=ENCODING, errors=ERRORS, newline="") as f:
            return f.read()
    except OSError as exception:
        raise ReadError(reason=f"cannot read file: {exception.strerror or exception}",
                        coord=path) from exception


def write_atomically(path: str, data) -> None:
    """Replace path with data (str or bytes), never leaving a partial file.

The data goes to a temporary file next to path first, which is renamed over
path once it is complete on disk.
    """
    directory = os.path.dirname(os.path.abspath(path))
    try:
        fd, temp_path = tempfile.mkstemp(
            dir=directory, prefix=f".{os.path.basename(path)}.", suffix=".tmp")
    except OSError as exception:
        raise _write_error(path, exception) from exception
    try:
        if isinstance(data, str):
            f = os.fdopen(fd, "w", encoding=ENCODING, errors=ERRORS, newline="")
        else:
            f = os.fdopen(fd, "wb")
        with f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        if os.path.exists(path):
            shutil.copymode(path, temp_path)
        os.replace(temp_path, path)
    except OSError as exception:
        try:
            os.remove(temp_path)
        except FileNotFoundError:
            pass
        raise _write_error(path, exception) from exception
    logger.debug("wrote %s", path)


def _write_error(path: str, exception: OSError) -> WriteError:
    return WriteError(reason=f"cannot write file: {exception.strerror or exception}",
                      coord=path)

"""Writing document text to disk on a background thread."""

from __future__ import annotations

import contextlib
import os
import stat
import tempfile
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable

DEFAULT_ENCODING = "utf-8"


def _absolute(file_name: str | None) -> str:
    if not file_name:
        return ""
    return os.path.abspath(file_name)


def write_to_disk(text: str, file_name: str, encoding: str = DEFAULT_ENCODING) -> None:
    """Replace the contents of file_name with text.

    The text is written to a temporary file beside the target and moved
    into place; if no temporary file can be created there, the target is
    written directly. Raises OSError on failure.
    """
    data = text.replace("\n", os.linesep).encode(encoding, errors="replace")
    directory = os.path.dirname(os.path.abspath(file_name))

    try:
        fd, temp_path = tempfile.mkstemp(prefix=".", suffix=".tmp", dir=directory)
    except OSError:
        with open(file_name, "wb") as handle:
            handle.write(data)
        return

    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
        with contextlib.suppress(OSError):
            mode = stat.S_IMODE(os.stat(file_name).st_mode)
            os.chmod(temp_path, mode)
        os.replace(temp_path, file_name)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(temp_path)
        raise


class AsyncTextWriter:
    """Writes text to a file in the background, one write at a time."""

    def __init__(self, file_name: str = "") -> None:
        self._file_name = _absolute(file_name)
        self._encoding = DEFAULT_ENCODING
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="text-writer")
        self._future: Future | None = None
        self._in_progress = False
        self._on_complete: list[Callable[[], None]] = []
        self._on_error: list[Callable[[str], None]] = []

    @property
    def file_name(self) -> str:
        return self._file_name

    @file_name.setter
    def file_name(self, value: str) -> None:
        self._file_name = _absolute(value)

    @property
    def encoding(self) -> str:
        return self._encoding

    @encoding.setter
    def encoding(self, value: str | None) -> None:
        self._encoding = value or DEFAULT_ENCODING

    @property
    def write_in_progress(self) -> bool:
        return self._in_progress

    def connect_write_complete(self, callback: Callable[[], None]) -> None:
        """Call callback after each successful write."""
        self._on_complete.append(callback)

    def connect_write_error(self, callback: Callable[[str], None]) -> None:
        """Call callback with an error description after each failed write."""
        self._on_error.append(callback)

    def write(self, text: str) -> bool:
        """Start writing text, replacing the file; False if no file name is set."""
        if not self._file_name:
            return False
        self.wait_for_finished()
        self._in_progress = True
        self._future = self._executor.submit(
            self._run, text, self._file_name, self._encoding
        )
        return True

    def wait_for_finished(self) -> None:
        """Block until the current write, if any, has finished."""
        future = self._future
        if future is not None:
            future.result()

    def close(self) -> None:
        """Wait for the current write and stop the background thread."""
        self.wait_for_finished()
        self._executor.shutdown(wait=True)

    def __enter__(self) -> AsyncTextWriter:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _run(self, text: str, file_name: str, encoding: str) -> None:
        error: str | None = None
        try:
            write_to_disk(text, file_name, encoding)
        except (OSError, LookupError) as exc:
            error = str(exc) or type(exc).__name__
        self._in_progress = False
        if error is not None:
            for callback in list(self._on_error):
                callback(error)
        else:
            for callback in list(self._on_complete):
                callback()
"""Line-oriented output sinks: console (optionally paged) and local file."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from ..core.errors import OutputError

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

PAGE_PROMPT = "-- hit enter to continue or 'q' to quit --"


class _Sink:
    """Shared close-once bookkeeping for sinks."""

    def __init__(self):
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def print(self, line: str) -> None:
        if self._closed:
            raise OutputError("Output sink is closed")
        self._write(line)

    def _write(self, line: str) -> None:
        raise NotImplementedError

    def close(self) -> None:
        if self._closed:
            raise OutputError("Output sink already closed")
        self._closed = True
        self._release()

    def _release(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if not self._closed:
            self.close()


class ConsoleSink(_Sink):
    """Write lines to a console stream, pausing after every page.

    Args:
        stream: Stream to write to (default stdout)
        page_size: Lines per page, None to disable paging
        prompt: Callable showing a prompt and returning the user's answer
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        page_size: int | None = None,
        prompt: Callable[[str], str] = input,
    ):
        super().__init__()
        self._stream = stream if stream is not None else sys.stdout
        self.page_size = page_size
        self._prompt = prompt
        self._lines = 0
        self._quit = False

    def _write(self, line: str) -> None:
        if self._quit:
            return
        if self.page_size and self._lines and self._lines % self.page_size == 0:
            self._stream.flush()
            if self._prompt(PAGE_PROMPT).strip().lower() == "q":
                self._quit = True
                logger.info(f"Output stopped by user after {self._lines} lines")
                return
        self._stream.write(line + "\n")
        self._lines += 1

    def _release(self) -> None:
        self._stream.flush()


class FileSink(_Sink):
    """Write lines to a local file, replacing any previous content."""

    def __init__(self, path: str | Path):
        super().__init__()
        self.path = Path(path)
        self._fd = open(self.path, "w", encoding="utf-8")
        logger.info(f"Writing output to {self.path}")

    def _write(self, line: str) -> None:
        self._fd.write(line + "\n")

    def _release(self) -> None:
        self._fd.close()


def open_sink(output_file: str | Path | None = None, page_size: int | None = None) -> _Sink:
    """Return a FileSink for output_file, or a ConsoleSink when it is None."""
    if output_file is None:
        return ConsoleSink(page_size=page_size)
    return FileSink(output_file)

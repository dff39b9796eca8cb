"""File sink writing the collection as one JSON array."""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from collections.abc import Sequence
from pathlib import Path
from typing import Any, TextIO

from ..core.exceptions import SinkError
from .json_array import JSONArrayWriter

logger = logging.getLogger(__name__)


class FileSink:
    """Writes documents to a file as a single JSON array.

    An existing file at ``path`` is overwritten. When a streamed collection
    is aborted the file is left as written so far, without its closing
    bracket, so it does not parse as JSON.

    With ``atomic=True`` the array is written to a temporary file next to
    ``path`` and renamed over it only when the collection completes, with
    the permissions of the file it replaces (or the umask default). An
    aborted or failed run removes the temporary file and leaves ``path``
    untouched.
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        *,
        atomic: bool = False,
        encoding: str = "utf-8",
    ) -> None:
        self._path = Path(path)
        self._atomic = atomic
        self._encoding = encoding
        self._handle: TextIO | None = None
        self._writer: JSONArrayWriter | None = None
        self._temp_path: Path | None = None

    @property
    def path(self) -> Path:
        return self._path

    @property
    def atomic(self) -> bool:
        return self._atomic

    @property
    def count(self) -> int:
        return self._writer.count if self._writer is not None else 0

    async def write_all(self, documents: Sequence[Any]) -> None:
        await self.open()
        try:
            await self.write_page(documents)
        except BaseException:
            await self.abort()
            raise
        await self.finish()

    async def open(self) -> None:
        if self._writer is not None:
            raise SinkError(f"sink for {self._path} was already opened", self._path)
        self._handle = self._open_handle()
        self._writer = JSONArrayWriter(self._handle)
        try:
            self._writer.begin()
        except OSError as exc:
            self._discard()
            raise SinkError(f"cannot write to {self._path}: {exc}", self._path) from exc

    async def write_page(self, documents: Sequence[Any]) -> None:
        writer = self._require_writer()
        try:
            writer.extend(documents)
        except OSError as exc:
            raise SinkError(f"cannot write to {self._path}: {exc}", self._path) from exc

    async def finish(self) -> None:
        writer = self._require_writer()
        try:
            writer.end()
            self._close_handle()
            if self._temp_path is not None:
                os.chmod(self._temp_path, self._target_mode())
                os.replace(self._temp_path, self._path)
                self._temp_path = None
        except OSError as exc:
            self._discard()
            raise SinkError(f"cannot finish {self._path}: {exc}", self._path) from exc
        logger.debug("file_sink_finished", extra={"path": str(self._path), "count": self.count})

    async def abort(self) -> None:
        self._discard()
        logger.warning(
            "file_sink_aborted",
            extra={"path": str(self._path), "count": self.count, "atomic": self._atomic},
        )

    def _discard(self) -> None:
        """Release the handle and remove the temporary file, if any."""
        try:
            self._close_handle()
        except OSError as exc:
            logger.warning("Failed to close %s: %s", self._path, exc)
        if self._temp_path is not None:
            self._temp_path.unlink(missing_ok=True)
            self._temp_path = None

    def _target_mode(self) -> int:
        # mkstemp creates 0600 files; match what a plain open() would produce.
        try:
            return stat.S_IMODE(os.stat(self._path).st_mode)
        except FileNotFoundError:
            umask = os.umask(0)
            os.umask(umask)
            return 0o666 & ~umask

    def _open_handle(self) -> TextIO:
        try:
            if not self._atomic:
                return open(self._path, "w", encoding=self._encoding)
            directory = self._path.parent
            fd, temp_name = tempfile.mkstemp(
                dir=directory, prefix=f".{self._path.name}.", suffix=".part"
            )
            self._temp_path = Path(temp_name)
            return os.fdopen(fd, "w", encoding=self._encoding)
        except OSError as exc:
            raise SinkError(f"cannot open {self._path}: {exc}", self._path) from exc

    def _close_handle(self) -> None:
        if self._handle is not None and not self._handle.closed:
            self._handle.close()

    def _require_writer(self) -> JSONArrayWriter:
        if self._writer is None or self._handle is None or self._handle.closed:
            raise SinkError(f"sink for {self._path} is not open", self._path)
        return self._writer

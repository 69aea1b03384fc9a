"""
Newline-delimited storage file with append and atomic replace.

Single-writer: no locking is done here, callers serialize mutations.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator

from docbot.vector_store.errors import StorageError

logger = logging.getLogger(__name__)


class LineStore:
    def __init__(self, path: str | Path, tmp_path: str | Path) -> None:
        self.path = Path(path)
        self.tmp_path = Path(tmp_path)

    def read_lines(self) -> Iterator[str]:
        """
        Lazily yield non-blank lines (without terminator) in file order.

        The file is opened on first pull and closed when the generator is
        exhausted, closed, or garbage collected after an early break.
        A missing file yields nothing. Bytes that are not valid UTF-8 are
        replaced, so the damaged line fails to decode as a record instead of
        aborting the read.
        """
        if not self.path.exists():
            return
        with self.path.open("r", encoding="utf-8", errors="replace") as handle:
            for raw in handle:
                line = raw.rstrip("\r\n")
                if line.strip():
                    yield line

    def append(self, lines: Iterable[str]) -> int:
        payload = "".join(f"{line}\n" for line in lines)
        if not payload:
            return 0
        written = payload.count("\n")

        self.path.parent.mkdir(parents=True, exist_ok=True)
        try:
            if not self._ends_with_newline():
                # Terminate a partial line left by an interrupted write.
                payload = "\n" + payload
            with self.path.open("a", encoding="utf-8") as handle:
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
        except OSError as exc:
            raise StorageError("Cannot append to store file", str(self.path)) from exc
        return written

    def _ends_with_newline(self) -> bool:
        if not self.path.exists():
            return True
        with self.path.open("rb") as handle:
            handle.seek(0, os.SEEK_END)
            if handle.tell() == 0:
                return True
            handle.seek(-1, os.SEEK_END)
            return handle.read(1) == b"\n"

    def atomic_replace(self, lines: Iterable[str]) -> int:
        """
        Write ``lines`` to the temporary file, then rename it over the store.

        The store file is only touched by the final ``os.replace``; if
        anything fails before or during it, the original is left as is and
        the temporary file is removed.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        written = 0
        try:
            with self.tmp_path.open("w", encoding="utf-8") as handle:
                for line in lines:
                    handle.write(f"{line}\n")
                    written += 1
                handle.flush()
                os.fsync(handle.fileno())
        except OSError as exc:
            self._discard_tmp()
            raise StorageError("Cannot write temporary file", str(self.tmp_path)) from exc
        except BaseException:
            self._discard_tmp()
            raise

        try:
            os.replace(self.tmp_path, self.path)
        except OSError as exc:
            self._discard_tmp()
            raise StorageError(f"Failed to replace store file with {self.tmp_path}", str(self.path)) from exc

        logger.debug("Store file replaced", extra={"path": str(self.path), "lines": written})
        return written

    def _discard_tmp(self) -> None:
        try:
            self.tmp_path.unlink(missing_ok=True)
        except OSError:
            logger.warning("Could not remove temporary file", extra={"path": str(self.tmp_path)})


__all__ = ["LineStore"]

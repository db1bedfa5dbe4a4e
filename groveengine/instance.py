"""Single-instance guard backed by a lock file."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Optional, Union

from filelock import FileLock, Timeout


class ProgramLock:
    """Holds a named lock so that only one copy of a program runs at a time."""

    def __init__(self, name: str,
                 directory: Optional[Union[str, Path]] = None) -> None:
        base = Path(directory) if directory is not None else Path(tempfile.gettempdir())
        self.path = base / f"{name}.lock"
        self._lock = FileLock(str(self.path))
        try:
            self._lock.acquire(timeout=0)
            self._owned = True
        except Timeout:
            self._owned = False

    def is_other_program_on(self) -> bool:
        """True when another holder already had the lock."""
        if not self._owned:
            print("program is running")
            return True
        return False

    def release(self) -> None:
        if self._owned:
            self._lock.release()
            self._owned = False

    def __enter__(self) -> "ProgramLock":
        return self

    def __exit__(self, *args) -> None:
        self.release()
"""Writing the same text to standard output and, optionally, to a log file."""

from __future__ import annotations

import sys
from typing import Any, Optional, TextIO

from dockcore.errors import PathLike, open_output


class Tee:
    """Duplicates everything written to standard output into an optional file."""

    def __init__(self, name: Optional[PathLike] = None) -> None:
        self._file: Optional[TextIO] = open_output(name) if name is not None else None

    def write(self, text: Any) -> Tee:
        """Write ``str(text)`` to both destinations; returns self for chaining."""
        s = str(text)
        sys.stdout.write(s)
        if self._file is not None:
            self._file.write(s)
        return self

    def flush(self) -> None:
        sys.stdout.flush()
        if self._file is not None:
            self._file.flush()

    def endl(self) -> None:
        """End the line and flush."""
        self.write("\n")
        self.flush()

    def close(self) -> None:
        """Close the log file, if any; standard output is left open."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> Tee:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
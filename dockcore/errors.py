"""Errors raised while reading input files, and helpers that open files."""

from __future__ import annotations

import os
from typing import TextIO, Union

PathLike = Union[str, "os.PathLike[str]"]

_ENCODING = "latin-1"


class ParseError(Exception):
    """A syntax error at a given line of an input file."""

    def __init__(self, file: PathLike, line: int, reason: str = "") -> None:
        self.file = os.fspath(file)
        self.line = line
        self.reason = reason
        super().__init__(f'Parse error on line {line} in file "{self.file}": {reason}')


class FileError(Exception):
    """A file that could not be opened for reading or for writing."""

    def __init__(self, name: PathLike, reading: bool) -> None:
        self.name = os.fspath(name)
        self.reading = reading
        action = "reading" if reading else "writing"
        super().__init__(f'could not open "{self.name}" for {action}')


def open_input(name: PathLike) -> TextIO:
    """Open a text file for reading; raises :class:`FileError` on failure."""
    try:
        return open(name, "r", encoding=_ENCODING)
    except OSError as exc:
        raise FileError(name, True) from exc


def open_output(name: PathLike) -> TextIO:
    """Open a text file for writing, truncating it; raises :class:`FileError` on failure."""
    try:
        return open(name, "w", encoding=_ENCODING)
    except OSError as exc:
        raise FileError(name, False) from exc
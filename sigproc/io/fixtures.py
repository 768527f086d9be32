"""Line-oriented signal files used for reference fixtures.

Format: one value per line. Real values are plain floats; complex values use
``real±imagi`` (``3.7782-3.1213i``, ``8.66025i``). Lines whose stripped text
starts with ``#`` are comments, and blank lines are ignored.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Iterable, List, Optional, Union

import numpy as np

from sigproc.config import settings
from sigproc.errors import InvalidArgument

Number = Union[float, complex]


def parse_value(text: str) -> Number:
    """Parse a single real or ``real±imagi`` value."""
    s = text.strip().replace(" ", "")
    if s.endswith("i"):
        return complex(s[:-1] + "j")
    return float(s)


def format_value(v: Number) -> str:
    """Format a value so that :func:`parse_value` reads it back exactly."""
    if isinstance(v, (complex, np.complexfloating)):
        v = complex(v)
        sign = "" if str(v.imag).startswith("-") else "+"
        return f"{v.real!r}{sign}{v.imag!r}i"
    return repr(float(v))


def read_signal(path: Union[str, Path]) -> np.ndarray:
    """Read a signal file into a float (or complex) array.

    Raises:
        InvalidArgument: If a non-comment line cannot be parsed; the message
            names the file and line number.
    """
    path = Path(path)
    values: List[Number] = []
    with open(path, "r") as fh:
        for lineno, line in enumerate(fh, start=1):
            s = line.strip()
            if not s or s.startswith("#"):
                continue
            try:
                values.append(parse_value(s))
            except ValueError as exc:
                raise InvalidArgument(f"{path}:{lineno}: cannot parse {s!r}") from exc
    if any(isinstance(v, complex) for v in values):
        return np.asarray(values, dtype=complex)
    return np.asarray(values, dtype=float)


def load_fixture(name: str) -> np.ndarray:
    """Read a fixture by file name from ``settings.fixtures_dir``."""
    return read_signal(Path(settings.fixtures_dir) / name)


@dataclass
class SignalWriter:
    """Writes one value per line with optional ``#`` header lines."""
    path: Path
    header: Optional[str] = None
    append: bool = False
    _fh: IO = field(init=False, repr=False)

    def __post_init__(self):
        self.path = Path(self.path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        mode = 'a' if self.append else 'w'
        self._fh = open(self.path, mode)
        if self.header and not self.append:
            for line in self.header.splitlines():
                self._fh.write(f"# {line}\n")

    def write(self, value: Number):
        """Write a single value."""
        self._fh.write(format_value(value) + "\n")

    def write_all(self, values: Iterable[Number]):
        for v in values:
            self.write(v)
        self._fh.flush()

    def close(self):
        """Close the underlying file handle."""
        self._fh.close()

    def __enter__(self) -> "SignalWriter":
        return self

    def __exit__(self, *exc):
        self.close()


def write_signal(path: Union[str, Path], x: Iterable[Number], header: Optional[str] = None) -> Path:
    """Write ``x`` to ``path`` in the fixture format and return the path."""
    with SignalWriter(Path(path), header=header) as w:
        w.write_all(x)
    return Path(path)

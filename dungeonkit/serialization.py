"""Length-prefixed binary records and file helpers used by the editors."""

from __future__ import annotations

import os
import struct
from collections import deque
from typing import BinaryIO, Callable, TypeVar

T = TypeVar("T")

_INT = struct.Struct("<i")
_FLOAT = struct.Struct("<f")
_WCHAR_SIZE = 2
_WSTRING_ENCODING = "utf-16-le"


class SerializationError(Exception):
    """Raised when a record cannot be written or read."""


class BinaryWriter:
    """Writes little-endian ints, floats and wide strings to a binary stream."""

    def __init__(self, stream: BinaryIO) -> None:
        self.stream = stream

    def write_int(self, value: int) -> None:
        try:
            self.stream.write(_INT.pack(value))
        except struct.error as exc:
            raise SerializationError(f"cannot write int {value!r}: {exc}") from exc

    def write_float(self, value: float) -> None:
        try:
            self.stream.write(_FLOAT.pack(value))
        except struct.error as exc:
            raise SerializationError(f"cannot write float {value!r}: {exc}") from exc

    def write_wstring(self, value: str) -> None:
        """Write a character count followed by UTF-16 code units."""
        encoded = value.encode(_WSTRING_ENCODING, errors="surrogatepass")
        self.write_int(len(encoded) // _WCHAR_SIZE)
        self.stream.write(encoded)


class BinaryReader:
    """Reads the records written by :class:`BinaryWriter`."""

    def __init__(self, stream: BinaryIO) -> None:
        self.stream = stream

    def _read_exact(self, size: int) -> bytes:
        data = self.stream.read(size)
        if len(data) != size:
            raise SerializationError(f"expected {size} bytes, got {len(data)}")
        return data

    def read_int(self) -> int:
        return _INT.unpack(self._read_exact(_INT.size))[0]

    def read_float(self) -> float:
        return _FLOAT.unpack(self._read_exact(_FLOAT.size))[0]

    def read_wstring(self) -> str:
        length = self.read_int()
        if length < 0:
            raise SerializationError(f"negative string length {length}")
        if length == 0:
            return ""
        data = self._read_exact(length * _WCHAR_SIZE)
        return data.decode(_WSTRING_ENCODING, errors="surrogatepass")


def save(path: str | os.PathLike[str], function: Callable[[BinaryWriter], T]) -> T:
    """Create or truncate ``path`` and let ``function`` write to it."""
    if not os.fspath(path):
        raise SerializationError("no file path given")
    try:
        stream = open(path, "wb")
    except OSError as exc:
        raise SerializationError(f"cannot open {os.fspath(path)!r} for writing") from exc
    with stream:
        return function(BinaryWriter(stream))


def load(path: str | os.PathLike[str], function: Callable[[BinaryReader], T]) -> T:
    """Open an existing ``path`` and let ``function`` read from it."""
    if not os.fspath(path):
        raise SerializationError("no file path given")
    try:
        stream = open(path, "rb")
    except OSError as exc:
        raise SerializationError(f"cannot open {os.fspath(path)!r} for reading") from exc
    with stream:
        return function(BinaryReader(stream))


def find_all_files(folder_path: str | os.PathLike[str]) -> list[tuple[str, str]]:
    """Walk a folder breadth first and list ``(file name, full path)`` pairs."""
    result: list[tuple[str, str]] = []
    queue: deque[str] = deque([os.fspath(folder_path)])
    while queue:
        path = queue.popleft()
        try:
            entries = sorted(os.scandir(path), key=lambda entry: entry.name)
        except OSError:
            continue
        for entry in entries:
            full_path = os.path.join(path, entry.name)
            if entry.is_dir():
                queue.append(full_path)
            else:
                result.append((entry.name, full_path))
    return result
"""
File-based storage backends.

Each backend keeps its whole value in a single file. Writes go to a
sibling temporary file that is then moved over the target with
``os.replace``, so readers see either the old or the new content, never
a partial one.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional, Union

from .base import BaseStorage
from .serialization import DataConverter, JSONConverter, pack, unpack
from ..utils.logging import get_logger


logger = get_logger(__name__)


class FileStorage(BaseStorage):
    """
    Raw bytes stored in a single file.

    Example:
        >>> storage = FileStorage("./data/blob.bin")
        >>> storage.write(b"hello")  # creates ./data if missing
        >>> storage.read()
        b'hello'

    Args:
        path: File path
        sync_on_write: fsync the temporary file before replacing the target
    """

    def __init__(
        self,
        path: Union[str, os.PathLike],
        sync_on_write: bool = False,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._path = Path(path)
        self._tmp_path = self._path.with_name(f".{self._path.name}.tmp")
        self._sync_on_write = sync_on_write

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> Optional[bytes]:
        """Read file contents, or None if the file does not exist."""
        try:
            data = self._path.read_bytes()
        except FileNotFoundError:
            self._record_read(False)
            return None

        self._record_read(True)
        return data

    def write(self, value: bytes) -> None:
        """Atomically replace file contents."""
        with self._lock:
            try:
                self._write_atomic(value)
            except FileNotFoundError:
                # Containing directory is created on first write
                logger.debug(f"Creating directory {self._path.parent}")
                self._path.parent.mkdir(parents=True, exist_ok=True)
                self._write_atomic(value)

            self._record_write(len(value))

    def _write_atomic(self, data: bytes) -> None:
        with open(self._tmp_path, "wb") as f:
            f.write(data)
            f.flush()
            if self._sync_on_write:
                os.fsync(f.fileno())

        os.replace(self._tmp_path, self._path)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path='{self._path}')"


class TextFileStorage(FileStorage):
    """
    Text stored in a single file.

    Args:
        path: File path
        encoding: Text encoding
    """

    def __init__(
        self,
        path: Union[str, os.PathLike],
        encoding: str = "utf-8",
        **kwargs,
    ):
        super().__init__(path, **kwargs)
        self._encoding = encoding

    def read(self) -> Optional[str]:
        data = super().read()
        if data is None:
            return None
        return data.decode(self._encoding)

    def write(self, value: str) -> None:
        super().write(value.encode(self._encoding))


class DataFileStorage(BaseStorage):
    """
    Structured data stored as text through a converter.

    The converter turns values into text and back; any object with
    ``parse(str)`` and ``stringify(value)`` methods will do.

    Example:
        >>> storage = DataFileStorage("./data/users.json", JSONConverter())
        >>> storage.write([{"id": 1, "name": "Ada"}])
    """

    def __init__(
        self,
        path: Union[str, os.PathLike],
        converter: DataConverter,
        encoding: str = "utf-8",
        sync_on_write: bool = False,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._file = TextFileStorage(
            path, encoding=encoding, sync_on_write=sync_on_write
        )
        self._converter = converter

    @property
    def path(self) -> Path:
        return self._file.path

    def read(self) -> Optional[Any]:
        data = self._file.read()
        self._record_read(data is not None)

        if data is None:
            return None

        return self._converter.parse(data)

    def write(self, value: Any) -> None:
        string = self._converter.stringify(value)
        self._file.write(string)
        self._record_write(len(string))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path='{self.path}')"


class JSONFileStorage(DataFileStorage):
    """
    JSON stored in a single file.

    Args:
        path: File path
        indent: Indentation for pretty printing (None = compact)
    """

    def __init__(
        self,
        path: Union[str, os.PathLike],
        indent: Optional[int] = 2,
        **kwargs,
    ):
        super().__init__(path, JSONConverter(indent=indent), **kwargs)


class MsgPackFileStorage(BaseStorage):
    """
    MessagePack stored in a single file.

    More compact and faster to parse than JSON, but not human readable.
    Tuples come back as lists.
    """

    def __init__(
        self,
        path: Union[str, os.PathLike],
        sync_on_write: bool = False,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._file = FileStorage(path, sync_on_write=sync_on_write)

    @property
    def path(self) -> Path:
        return self._file.path

    def read(self) -> Optional[Any]:
        data = self._file.read()
        self._record_read(data is not None)

        if data is None:
            return None

        return unpack(data)

    def write(self, value: Any) -> None:
        data = pack(value)
        self._file.write(data)
        self._record_write(len(data))

    def __repr__(self) -> str:
        return f"MsgPackFileStorage(path='{self.path}')"

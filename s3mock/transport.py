"""Filesystem transport for the mock S3 client."""
from __future__ import annotations

import os
import shutil
from abc import ABC, abstractmethod
from pathlib import Path
from typing import BinaryIO, List, Optional


class Filesystem(ABC):
    """Capability set the mock needs from a backing store."""

    @abstractmethod
    def list_dir(self, path: str) -> List[str]:
        """Return the entry names of a directory."""
        pass

    @abstractmethod
    def stat(self, path: str) -> os.stat_result:
        """Return stat information for a path."""
        pass

    @abstractmethod
    def is_dir(self, path: str) -> bool:
        """Check whether a path is a directory."""
        pass

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Check whether a path exists."""
        pass

    @abstractmethod
    def read_bytes(self, path: str) -> bytes:
        """Read a whole file."""
        pass

    @abstractmethod
    def write_bytes(self, path: str, data: bytes) -> None:
        """Write a whole file, replacing any existing content."""
        pass

    @abstractmethod
    def delete(self, path: str) -> None:
        """Unlink a file."""
        pass

    @abstractmethod
    def mkdir_tree(self, path: str) -> None:
        """Create a directory and any missing parents."""
        pass

    @abstractmethod
    def remove_tree(self, path: str) -> None:
        """Remove a directory tree. Missing trees are not an error."""
        pass

    @abstractmethod
    def open_read(self, path: str) -> BinaryIO:
        """Open a readable binary stream."""
        pass

    @abstractmethod
    def open_write(self, path: str) -> BinaryIO:
        """Open a writable binary stream."""
        pass


class LocalFilesystem(Filesystem):
    """Filesystem backed by the local disk."""

    def list_dir(self, path: str) -> List[str]:
        return sorted(os.listdir(path))

    def stat(self, path: str) -> os.stat_result:
        return os.stat(path)

    def is_dir(self, path: str) -> bool:
        return Path(path).is_dir()

    def exists(self, path: str) -> bool:
        return Path(path).exists()

    def read_bytes(self, path: str) -> bytes:
        return Path(path).read_bytes()

    def write_bytes(self, path: str, data: bytes) -> None:
        Path(path).write_bytes(data)

    def delete(self, path: str) -> None:
        Path(path).unlink()

    def mkdir_tree(self, path: str) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)

    def remove_tree(self, path: str) -> None:
        if Path(path).exists():
            shutil.rmtree(path)

    def open_read(self, path: str) -> BinaryIO:
        return open(path, "rb")

    def open_write(self, path: str) -> BinaryIO:
        return open(path, "wb")


def walk(directory: str, fs: Optional[Filesystem] = None) -> List[str]:
    """
    List every file under a directory, recursively.

    Paths are built as ``directory + "/" + name`` so that bucket-relative keys
    can be recovered by stripping the bucket prefix. Directories themselves are
    never included.
    """
    fs = fs or LocalFilesystem()
    results: List[str] = []
    for name in fs.list_dir(directory):
        path = f"{directory}/{name}"
        if fs.is_dir(path):
            results.extend(walk(path, fs))
        else:
            results.append(path)
    return results

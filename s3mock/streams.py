"""Stream helpers for object bodies."""
from __future__ import annotations

import os
import shutil
from typing import Any, BinaryIO, Mapping

from .paths import object_path
from .transport import Filesystem


class ObjectStream:
    """Lazy read handle for an object; nothing is opened until asked."""

    def __init__(self, search: Mapping[str, Any], fs: Filesystem):
        self.src = object_path(search["Bucket"], search["Key"])
        self._fs = fs

    def create_read_stream(self) -> BinaryIO:
        return self._fs.open_read(self.src)


def is_readable(body: Any) -> bool:
    return callable(getattr(body, "read", None))


def pipe_to_file(source: Any, dest: str, fs: Filesystem) -> None:
    """Copy a readable stream into ``dest``, creating its directory first."""
    fs.mkdir_tree(os.path.dirname(dest) or ".")
    with fs.open_write(dest) as sink:
        shutil.copyfileobj(source, sink)

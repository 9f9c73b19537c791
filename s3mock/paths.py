"""Mapping of (bucket, key) requests onto filesystem paths."""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from .settings import get_settings


BASE_PATH_KEYS = ("Bucket", "CopySource")


def apply_base_path(params: Mapping[str, Any], base_path: Optional[str] = None) -> Dict[str, Any]:
    """Prefix the bucket-identifying fields of a request with the base path."""
    if base_path is None:
        base_path = get_settings().base_path
    if base_path is None:
        return dict(params)
    return {
        key: f"{base_path}/{value}" if key in BASE_PATH_KEYS else value
        for key, value in params.items()
    }


def object_path(bucket: str, key: str) -> str:
    """Filesystem path of an object."""
    return f"{bucket}/{key}"


def relative_key(path: str, bucket: str) -> str:
    """Bucket-relative key of a walked file path."""
    prefix = bucket + "/"
    return path[len(prefix):] if path.startswith(prefix) else path

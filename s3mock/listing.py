"""Listing engine: prefix-filtered, paginated enumeration of a bucket."""
from __future__ import annotations

import hashlib
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .errors import NoSuchBucket
from .paths import relative_key
from .transport import Filesystem, walk


MAX_KEYS = 1000


class MarkerMatch(Enum):
    """How a marker relates to the filtered file sequence."""

    EXACT = "exact"
    PARTIAL = "partial"
    NONE = "none"


def etag_of(data: bytes) -> str:
    """Quoted lowercase-hex MD5 of object content."""
    return '"' + hashlib.md5(data).hexdigest() + '"'


def last_modified(mtime: float) -> datetime:
    return datetime.fromtimestamp(mtime, tz=timezone.utc)


def classify_marker(files: List[str], bucket: str, marker: str) -> Tuple[MarkerMatch, int]:
    """
    Locate a marker in the filtered sequence.

    The first file whose path starts with ``bucket/marker`` decides: an exact
    match resumes after it, a strict prefix match resumes at it.
    """
    target = f"{bucket}/{marker}"
    for index, path in enumerate(files):
        if path.startswith(target):
            if len(path) == len(target):
                return MarkerMatch.EXACT, index
            return MarkerMatch.PARTIAL, index
    return MarkerMatch.NONE, -1


def resume_index(files: List[str], bucket: str, marker: Optional[str]) -> Optional[int]:
    """Index the page starts at, or None when the marker is past the end."""
    if not marker:
        return 0
    match, index = classify_marker(files, bucket, marker)
    if match is MarkerMatch.EXACT:
        return index + 1
    if match is MarkerMatch.PARTIAL:
        return index
    return None


def common_prefixes(keys: List[str]) -> List[Dict[str, str]]:
    """Unique parent "directories" of the keys, in first-seen order."""
    seen: List[str] = []
    for key in keys:
        prefix = "/".join(key.split("/")[:-1]) + "/"
        if prefix not in seen:
            seen.append(prefix)
    return [{"Prefix": prefix} for prefix in seen]


def _summary(path: str, bucket: str, fs: Filesystem) -> Dict[str, Any]:
    stat = fs.stat(path)
    return {
        "Key": relative_key(path, bucket),
        "ETag": etag_of(fs.read_bytes(path)),
        "LastModified": last_modified(stat.st_mtime),
        "Size": stat.st_size,
    }


def list_objects(search: Mapping[str, Any], fs: Filesystem) -> Dict[str, Any]:
    """
    List a bucket the V1 way.

    ``search`` must already carry the base-path adjusted ``Bucket``. Supports
    ``Prefix``, ``Marker``, ``MaxKeys`` and ``Delimiter``. ``NextMarker`` is only
    set when the page is truncated and a delimiter was requested.
    """
    bucket = search["Bucket"]
    prefix = search.get("Prefix")
    marker = search.get("Marker")

    if not fs.is_dir(bucket):
        raise NoSuchBucket()

    files = [
        path for path in walk(bucket, fs)
        if not prefix or relative_key(path, bucket).startswith(prefix)
    ]

    start = resume_index(files, bucket, marker)
    files = [] if start is None else files[start:]

    limit = min(MAX_KEYS, search.get("MaxKeys") or MAX_KEYS)
    truncated = len(files) > limit
    if truncated:
        files = files[:limit]

    contents = [_summary(path, bucket, fs) for path in files]
    result: Dict[str, Any] = {
        "Contents": contents,
        "CommonPrefixes": common_prefixes([item["Key"] for item in contents]),
        "IsTruncated": truncated,
    }

    if marker:
        result["Marker"] = marker

    if truncated and search.get("Delimiter"):
        result["NextMarker"] = contents[-1]["Key"]

    return result


def list_objects_v2(search: Mapping[str, Any], fs: Filesystem) -> Dict[str, Any]:
    """
    List a bucket the V2 way, by translation onto :func:`list_objects`.

    ``ContinuationToken`` takes precedence over ``StartAfter`` as the marker.
    """
    search_v1 = dict(search)
    search_v1["Marker"] = search.get("ContinuationToken") or search.get("StartAfter")

    result = dict(list_objects(search_v1, fs))
    result["NextContinuationToken"] = result.pop("NextMarker", None)
    # V2 results carry ContinuationToken/StartAfter instead of the V1 Marker.
    result.pop("Marker", None)
    result["ContinuationToken"] = search.get("ContinuationToken")
    result["StartAfter"] = search.get("StartAfter")
    result["KeyCount"] = len(result["Contents"])
    return result

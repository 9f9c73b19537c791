"""Mock S3 client - filesystem-backed stand-in for the S3 object-storage API."""
from __future__ import annotations

import os
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import unquote

from . import listing
from .errors import DeleteObjectsError, InvalidParameterError, NoSuchKey, mark_not_found
from .listing import etag_of, last_modified
from .paths import apply_base_path, object_path
from .promisable import Callback, SendHandle, promisable
from .schemas import validate_bucket_params, validate_tagging
from .settings import get_settings
from .side_tables import object_metadata, object_tagging, parse_tagging
from .streams import ObjectStream, is_readable, pipe_to_file
from .transport import Filesystem


class ClientConfig:
    """Client configuration holder; updates are recorded and otherwise ignored."""

    def __init__(self):
        self.values: Dict[str, Any] = {}

    def update(self, options: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> None:
        self.values.update(options or {}, **kwargs)


class S3Mock:
    """Mocks the key pieces of the S3 client on top of a local directory tree."""

    object_metadata = object_metadata
    object_tagging = object_tagging

    def __init__(self, options: Optional[Mapping[str, Any]] = None):
        self.default_params: Dict[str, Any] = {}
        if options and options.get("params") is not None:
            self.default_params = apply_base_path(options["params"])
        self.config = ClientConfig()

    @property
    def fs(self) -> Filesystem:
        return get_settings().fs

    def _prepare(self, params: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        """Merge client defaults under the base-path adjusted request."""
        return {**self.default_params, **apply_base_path(params or {})}

    @promisable
    def list_objects(self, params: Optional[Mapping[str, Any]], callback: Optional[Callback]) -> Any:
        search = self._prepare(params)
        callback(None, listing.list_objects(search, self.fs))

    @promisable
    def list_objects_v2(self, params: Optional[Mapping[str, Any]], callback: Optional[Callback]) -> Any:
        search = self._prepare(params)
        callback(None, listing.list_objects_v2(search, self.fs))

    @promisable
    def delete_objects(self, params: Optional[Mapping[str, Any]], callback: Optional[Callback]) -> Any:
        search = self._prepare(params)

        deleted: List[Dict[str, Any]] = []
        errors: List[Dict[str, Any]] = []

        for item in search["Delete"]["Objects"]:
            path = object_path(search["Bucket"], item["Key"])
            if self.fs.exists(path):
                deleted.append(item)
                self.fs.delete(path)
            else:
                errors.append(item)

        if errors:
            callback(DeleteObjectsError(deleted, errors), {"Errors": errors, "Deleted": deleted})
        else:
            callback(None, {"Deleted": deleted})

    @promisable
    def delete_object(self, params: Optional[Mapping[str, Any]], callback: Optional[Callback]) -> Any:
        """Delete an object. Succeeds with True if it existed, {} otherwise."""
        search = self._prepare(params)
        path = object_path(search["Bucket"], search["Key"])

        if self.fs.exists(path):
            self.fs.delete(path)
            callback(None, True)
        else:
            callback(None, {})

    @promisable(streamable=True)
    def head_object(self, params: Optional[Mapping[str, Any]], callback: Optional[Callback]) -> Any:
        search = self._prepare(params)

        if callback is None:
            return ObjectStream(search, self.fs)

        path = object_path(search["Bucket"], search["Key"])
        try:
            data = self.fs.read_bytes(path)
            stat = self.fs.stat(path)
        except OSError as e:
            return callback(mark_not_found(e), search)

        props: Dict[str, Any] = {
            "Key": search["Key"],
            "ETag": etag_of(data),
            "ContentLength": len(data),
            "LastModified": last_modified(stat.st_mtime),
        }
        if search["Key"] in self.object_metadata:
            props["Metadata"] = self.object_metadata.get(search["Key"])

        callback(None, props)

    @promisable(streamable=True)
    def get_object(self, params: Optional[Mapping[str, Any]], callback: Optional[Callback]) -> Any:
        search = self._prepare(params)

        if callback is None:
            return ObjectStream(search, self.fs)

        path = object_path(search["Bucket"], search["Key"])
        try:
            data = self.fs.read_bytes(path)
            stat = self.fs.stat(path)
        except FileNotFoundError:
            return callback(NoSuchKey(), search)
        except OSError as e:
            return callback(e, search)

        props: Dict[str, Any] = {
            "Key": search["Key"],
            "ETag": etag_of(data),
            "Body": data,
            "LastModified": last_modified(stat.st_mtime),
            "ContentLength": len(data),
        }
        if search["Key"] in self.object_metadata:
            props["Metadata"] = self.object_metadata.get(search["Key"])

        callback(None, props)

    @promisable
    def copy_object(self, params: Optional[Mapping[str, Any]], callback: Optional[Callback]) -> Any:
        """Copy ``CopySource`` ("bucket/key", may be percent-encoded) onto Bucket/Key."""
        search = self._prepare(params)
        dest = object_path(search["Bucket"], search["Key"])

        try:
            data = self.fs.read_bytes(unquote(search["CopySource"]))
        except OSError as e:
            return callback(mark_not_found(e), search)

        try:
            self.fs.mkdir_tree(os.path.dirname(dest))
            self.fs.write_bytes(dest, data)
        except OSError as e:
            return callback(e, search)

        callback(None, search)

    @promisable
    def create_bucket(self, params: Optional[Mapping[str, Any]], callback: Optional[Callback]) -> Any:
        validate_bucket_params(params)
        opts = self._prepare(params)
        self.fs.mkdir_tree(opts["Bucket"])
        callback(None, {"Location": "/" + params["Bucket"]})

    @promisable
    def delete_bucket(self, params: Optional[Mapping[str, Any]], callback: Optional[Callback]) -> Any:
        """Delete a bucket and everything in it. Validation as create_bucket."""
        validate_bucket_params(params)
        opts = self._prepare(params)
        self.fs.remove_tree(opts["Bucket"])
        callback(None, {})

    @promisable
    def put_object(self, params: Optional[Mapping[str, Any]], callback: Optional[Callback]) -> Any:
        """
        Store an object from ``Body``.

        ``Body`` may be ``bytes``, ``str`` or a readable file-like object.
        ``Metadata`` and a URL-query encoded ``Tagging`` string are kept in the
        side tables. Returns a :class:`SendHandle` for extra completion callbacks.
        """
        search = self._prepare(params)
        key = search["Key"]

        if search.get("Metadata"):
            self.object_metadata.put(key, search["Metadata"])

        if isinstance(search.get("Tagging"), str):
            self.object_tagging.put(key, parse_tagging(search["Tagging"]))

        dest = object_path(search["Bucket"], key)
        handle = SendHandle(callback)

        body = search.get("Body", b"")
        if isinstance(body, str):
            body = body.encode("utf-8")

        if isinstance(body, (bytes, bytearray, memoryview)):
            body = bytes(body)
            try:
                self.fs.mkdir_tree(os.path.dirname(dest))
                self.fs.write_bytes(dest, body)
            except OSError as e:
                handle.finish(e)
            else:
                handle.finish(None, {"Location": dest, "Key": key, "Bucket": search["Bucket"], "ETag": etag_of(body)})
        elif is_readable(body):
            try:
                pipe_to_file(body, dest, self.fs)
            except Exception as e:
                handle.finish(e)
            else:
                handle.finish(None, True)
        else:
            raise InvalidParameterError("Body must be bytes, str or a readable stream")

        return handle

    @promisable
    def get_object_tagging(self, params: Optional[Mapping[str, Any]], callback: Optional[Callback]) -> Any:
        def on_head(err, props):
            if err:
                return callback(err, None)
            callback(None, {
                "VersionId": "1",
                "TagSet": self.object_tagging.get(params["Key"], []),
            })

        self.head_object(params, on_head)

    @promisable
    def put_object_tagging(self, params: Optional[Mapping[str, Any]], callback: Optional[Callback]) -> Any:
        tag_set = validate_tagging(params)

        def on_head(err, props):
            if err:
                return callback(err, None)
            self.object_tagging.put(params["Key"], tag_set)
            callback(None, {"VersionId": "1"})

        self.head_object(params, on_head)

    @promisable
    def upload(
        self,
        params: Optional[Mapping[str, Any]],
        callback: Optional[Callback],
        options: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """
        Managed upload; forwards to put_object.

        ``options`` (part size, queue size) are accepted and have no effect.
        """
        return self.put_object(params, callback)


def S3(options: Optional[Mapping[str, Any]] = None) -> S3Mock:
    """Create a mock S3 client, e.g. ``S3({"params": {"Bucket": "b"}})``."""
    return S3Mock(options)

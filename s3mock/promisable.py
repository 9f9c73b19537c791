"""Callback / deferred dual invocation for mock S3 operations.

Every public operation can be called either with a ``callback(error, data)``,
in which case it runs at once, or without one, in which case a
:class:`DeferredCall` is returned::

    s3.get_object(params, callback)
    s3.get_object(params).promise().result()
    s3.get_object(params).send(callback)
    s3.get_object(params).create_read_stream()
"""
from __future__ import annotations

import functools
import inspect
from concurrent.futures import Future
from typing import Any, Callable, Optional

from .logs import log_error, log_operation

Callback = Callable[[Optional[BaseException], Any], None]


class _Completion:
    """Completion channel handed to an operation."""

    def __init__(self, operation: str, callback: Callback):
        self.operation = operation
        self.callback = callback
        self.done = False

    def __call__(self, error: Optional[BaseException] = None, data: Any = None) -> None:
        self.done = True
        if error is not None:
            log_error(self.operation, error)
        self.callback(error, data)


class DeferredCall:
    """Handle for an operation invoked without a callback."""

    def __init__(
        self,
        operation: Callable,
        instance: Any,
        params: Any,
        options: Any = None,
        accepts_options: bool = False,
        streamable: bool = False,
    ):
        self._operation = operation
        self._instance = instance
        self._params = params
        self._options = options
        self._accepts_options = accepts_options
        self._streamable = streamable

    @property
    def operation_name(self) -> str:
        return self._operation.__name__

    def _call(self, callback: Any) -> Any:
        if self._accepts_options:
            return self._operation(self._instance, self._params, callback, options=self._options)
        return self._operation(self._instance, self._params, callback)

    def run(self, callback: Callback) -> Any:
        """Run the operation, delivering its outcome to ``callback``."""
        completion = _Completion(self.operation_name, callback)
        try:
            return self._call(completion)
        except Exception as e:
            if completion.done:
                raise
            completion(e, None)
            return None

    def promise(self) -> Future:
        """Run the operation and return a future settled with its outcome."""
        log_operation(self.operation_name, "promise", self._params)
        future: Future = Future()

        def settle(error: Optional[BaseException], data: Any) -> None:
            if future.done():
                return
            if error is not None:
                future.set_exception(error)
            else:
                future.set_result(data)

        self.run(settle)
        return future

    def send(self, callback: Callback) -> Any:
        """Manually trigger the operation with ``callback``."""
        log_operation(self.operation_name, "send", self._params)
        return self.run(callback)

    def create_read_stream(self):
        """Open the object as a readable stream (get/head only)."""
        if not self._streamable:
            raise TypeError(f"{self.operation_name} does not support create_read_stream()")
        log_operation(self.operation_name, "stream", self._params)
        return self._call(None).create_read_stream()


class SendHandle:
    """Completion fan-out returned by operations with a "send later" channel."""

    def __init__(self, callback: Optional[Callback] = None):
        self._callbacks = [callback] if callback is not None else []
        self._outcome: Optional[tuple] = None

    @property
    def finished(self) -> bool:
        return self._outcome is not None

    def send(self, callback: Callback) -> "SendHandle":
        """Register an extra completion callback; runs at once if finished."""
        if self._outcome is not None:
            callback(*self._outcome)
        else:
            self._callbacks.append(callback)
        return self

    def finish(self, error: Optional[BaseException], data: Any = None) -> None:
        self._outcome = (error, data)
        for callback in self._callbacks:
            callback(error, data)


def promisable(operation: Optional[Callable] = None, *, streamable: bool = False) -> Callable:
    """
    Decorate an operation ``(self, params, callback[, options])``.

    The decorated method takes ``(params, options=None, callback=None)``; a
    callable ``options`` is taken as the callback. Options are only forwarded
    to operations that declare an ``options`` parameter. ``streamable``
    operations return a lazy stream when called with ``callback=None``.
    """
    if operation is None:
        return functools.partial(promisable, streamable=streamable)

    accepts_options = "options" in inspect.signature(operation).parameters

    @functools.wraps(operation)
    def wrapper(self, params: Any = None, options: Any = None, callback: Optional[Callback] = None):
        if callable(options):
            callback, options = options, None
        call = DeferredCall(operation, self, params, options, accepts_options, streamable)
        if callback is None:
            return call
        log_operation(operation.__name__, "callback", params)
        return call.run(callback)

    wrapper.__promisable__ = True
    return wrapper

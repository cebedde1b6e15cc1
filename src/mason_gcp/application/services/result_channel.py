"""Bounded, closable channel carrying creation results to the aggregator."""

import queue
import threading
from typing import Iterator

from mason_gcp.domain.base.exceptions import DomainException
from mason_gcp.domain.resource.value_objects import CreationResult


class ChannelClosedError(DomainException):
    """A result was sent after the channel was closed."""

    default_error_code = "CHANNEL_CLOSED"


class ChannelNotClosedError(DomainException):
    """The channel was drained while producers could still send."""

    default_error_code = "CHANNEL_NOT_CLOSED"


class ResultChannel:
    """Many producers, one consumer; drained only after it is closed.

    The capacity is fixed up front to the number of dispatched tasks, so a
    producer never blocks waiting for the consumer.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self._capacity = capacity
        self._queue: "queue.Queue[CreationResult]" = queue.Queue(maxsize=max(capacity, 1))
        self._closed = threading.Event()

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def send(self, result: CreationResult) -> None:
        if self._closed.is_set():
            raise ChannelClosedError("result channel is closed")
        self._queue.put_nowait(result)

    def close(self) -> None:
        self._closed.set()

    def __iter__(self) -> Iterator[CreationResult]:
        if not self._closed.is_set():
            raise ChannelNotClosedError("result channel must be closed before draining")
        while True:
            try:
                yield self._queue.get_nowait()
            except queue.Empty:
                return

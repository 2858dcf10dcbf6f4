"""
Multiple-producer / single-consumer channel for asyncio tasks.

The receiver stops iterating once every sender handle has been closed and
all buffered values have been delivered, so each task that holds a sender
must release it (``with tx:`` does that on every exit path).
"""
from __future__ import annotations

import asyncio
from typing import Generic, Tuple, TypeVar

T = TypeVar("T")

_EXHAUSTED = object()


class ChannelClosed(RuntimeError):
    pass


class _State:
    def __init__(self) -> None:
        self.queue: asyncio.Queue = asyncio.Queue()
        self.senders = 0
        self.receiver_closed = False


class Sender(Generic[T]):
    def __init__(self, state: _State):
        self._state = state
        self._closed = False
        state.senders += 1

    @property
    def closed(self) -> bool:
        return self._closed

    def clone(self) -> "Sender[T]":
        if self._closed:
            raise ChannelClosed("clone of a released sender")
        return Sender(self._state)

    def send(self, value: T) -> None:
        if self._closed:
            raise ChannelClosed("send on a released sender")
        if self._state.receiver_closed:
            raise ChannelClosed("send after the receiver went away")
        # unbounded queue, never waits
        self._state.queue.put_nowait(value)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._state.senders -= 1
        if self._state.senders == 0:
            self._state.queue.put_nowait(_EXHAUSTED)

    def __enter__(self) -> "Sender[T]":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class Receiver(Generic[T]):
    def __init__(self, state: _State):
        self._state = state
        self._done = False

    def close(self) -> None:
        self._state.receiver_closed = True

    def __aiter__(self) -> "Receiver[T]":
        return self

    async def __anext__(self) -> T:
        if self._done:
            raise StopAsyncIteration
        item = await self._state.queue.get()
        if item is _EXHAUSTED:
            self._done = True
            raise StopAsyncIteration
        return item


def channel() -> Tuple[Sender, Receiver]:
    state = _State()
    return Sender(state), Receiver(state)

from __future__ import annotations

import asyncio
import contextlib
import logging
import sys
import time
from typing import List, Optional

from .channel import Receiver, Sender, channel
from .logger import get_logger, log_event
from .models import MAX_PORT, PortRange, ScanResult
from .output import print_progress

if sys.platform != "win32":
    import resource

DEFAULT_CONCURRENCY = 1024

# descriptors left for stdio, the event loop and logging
_FD_RESERVE = 64


def default_concurrency() -> int:
    """
    In-flight connect cap derived from the open-file limit, so a full
    1-65535 sweep does not run out of descriptors.
    """
    if sys.platform == "win32":
        return DEFAULT_CONCURRENCY
    soft, _ = resource.getrlimit(resource.RLIMIT_NOFILE)
    if soft == resource.RLIM_INFINITY:
        return MAX_PORT
    return max(1, min(soft - _FD_RESERVE, MAX_PORT))


def _gate(max_concurrency: int):
    if max_concurrency > 0:
        return asyncio.Semaphore(max_concurrency)
    return contextlib.nullcontext()


async def _connect(target: str, port: int, timeout: Optional[float]) -> None:
    conn = asyncio.open_connection(target, port)
    if timeout is not None:
        conn = asyncio.wait_for(conn, timeout)
    _, writer = await conn
    writer.close()
    try:
        await writer.wait_closed()
    except OSError:
        # peer reset during teardown; the handshake already succeeded
        pass


async def probe(
    tx: Sender,
    target: str,
    port: int,
    gate=None,
    timeout: Optional[float] = None,
    progress: bool = True,
) -> ScanResult:
    """
    Single connect attempt, no retry. Sends ``port`` on success; a failed
    connect of any kind is a closed port and sends nothing. ``tx`` is
    released on every exit path.
    """
    logger = get_logger()
    with tx:
        start = time.perf_counter()
        try:
            async with gate or contextlib.nullcontext():
                await _connect(target, port, timeout)
        except (asyncio.TimeoutError, OSError) as e:
            elapsed = round(time.perf_counter() - start, 4)
            log_event(logger, "probe_closed", {
                "target": target,
                "port": port,
                "reason": type(e).__name__,
                "elapsed_s": elapsed,
            }, level=logging.DEBUG)
            return ScanResult(
                target=target,
                port=port,
                is_open=False,
                elapsed_s=elapsed,
                reason=type(e).__name__,
            )

        elapsed = round(time.perf_counter() - start, 4)
        if progress:
            print_progress()
        # ChannelClosed here is a broken invariant and aborts the task
        tx.send(port)
        log_event(logger, "probe_open", {
            "target": target,
            "port": port,
            "elapsed_s": elapsed,
        }, level=logging.DEBUG)
        return ScanResult(target=target, port=port, is_open=True, elapsed_s=elapsed)


def schedule(
    port_range: PortRange,
    target: str,
    tx: Sender,
    max_concurrency: int = 0,
    timeout: Optional[float] = None,
    progress: bool = True,
) -> List[asyncio.Task]:
    """
    Spawns one probe task per port and releases the scheduler's own
    sender. Must be called from a running event loop.
    """
    gate = _gate(max_concurrency)
    tasks: List[asyncio.Task] = []

    with tx:
        for port in port_range:
            sender = tx.clone()
            task = asyncio.create_task(probe(sender, target, port, gate, timeout, progress))
            # covers a task cancelled before its body ever ran
            task.add_done_callback(lambda _t, s=sender: s.close())
            tasks.append(task)

    return tasks


async def collect(rx: Receiver) -> List[int]:
    out: List[int] = []
    async for port in rx:
        out.append(port)
    return out


async def scan_async(
    target: str,
    port_range: PortRange,
    max_concurrency: Optional[int] = None,
    timeout: Optional[float] = None,
    progress: bool = True,
) -> List[int]:
    if max_concurrency is None:
        max_concurrency = default_concurrency()

    logger = get_logger()
    log_event(logger, "scan_start", {
        "target": target,
        "start": port_range.start,
        "end": port_range.end,
        "probes": len(port_range),
        "max_concurrency": max_concurrency,
        "timeout": timeout,
    })
    start_all = time.perf_counter()

    tx, rx = channel()
    tasks = schedule(port_range, target, tx, max_concurrency, timeout, progress)
    try:
        out = await collect(rx)
    finally:
        rx.close()

    # every probe is done once the channel is exhausted; this re-raises
    # any task that died on a broken channel invariant
    await asyncio.gather(*tasks)

    out.sort()
    log_event(logger, "scan_complete", {
        "target": target,
        "open": len(out),
        "elapsed_s": round(time.perf_counter() - start_all, 4),
    })
    return out


def scan(
    target: str,
    port_range: PortRange,
    max_concurrency: Optional[int] = None,
    timeout: Optional[float] = None,
    progress: bool = True,
) -> List[int]:
    return asyncio.run(scan_async(target, port_range, max_concurrency, timeout, progress))

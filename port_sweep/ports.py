from __future__ import annotations

import argparse

from .models import MAX_PORT, PortRange

DEFAULT_START = 1
DEFAULT_END = MAX_PORT


def _to_int(text: str) -> int:
    try:
        return int(text.strip())
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Not a port number: {text!r}") from e


def start_port(text: str) -> int:
    port = _to_int(text)
    if port < 1:
        raise argparse.ArgumentTypeError("Must be greater than 0")
    if port > MAX_PORT:
        raise argparse.ArgumentTypeError(f"Must be at most {MAX_PORT}")
    return port


def end_port(text: str) -> int:
    """
    The highest port is never accepted as an end, so with the half-open
    scan range port 65535 is only reachable through the library API.
    """
    port = _to_int(text)
    if not 0 <= port < MAX_PORT:
        raise argparse.ArgumentTypeError(f"Must be less than {MAX_PORT}")
    return port


def build_range(start: int, end: int) -> PortRange:
    return PortRange(start=start, end=end)

from __future__ import annotations

from typing import Iterable


def print_progress() -> None:
    # one marker per open port, no newline
    print(".", end="", flush=True)


def format_row(port: int) -> str:
    return f"{port} is open"


def print_results(ports: Iterable[int]) -> None:
    print()  # separator after the progress markers

    for port in sorted(ports):
        print(format_row(port))

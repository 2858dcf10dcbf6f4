from dataclasses import dataclass
from typing import Iterator, Optional

MAX_PORT = 65535


@dataclass(frozen=True)
class PortRange:
    """
    Half-open port interval [start, end).
    """
    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 1:
            raise ValueError(f"Invalid start port: {self.start}")
        if self.end > MAX_PORT:
            raise ValueError(f"Invalid end port: {self.end}")
        if self.start > self.end:
            raise ValueError(f"Invalid port range: {self.start}-{self.end}")

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.start, self.end))

    def __len__(self) -> int:
        return self.end - self.start

    def __contains__(self, port: object) -> bool:
        return isinstance(port, int) and self.start <= port < self.end


@dataclass(frozen=True)
class ScanResult:
    target: str
    port: int
    is_open: bool
    elapsed_s: float
    reason: Optional[str] = None

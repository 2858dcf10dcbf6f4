from __future__ import annotations

import ipaddress
import socket

DEFAULT_ADDRESS = "127.0.0.1"


def resolve_target(target: str) -> str:
    """
    Normalises the single scan target to an address string. IP literals
    pass through unchanged; anything else is looked up as a hostname and
    the first IPv4 address wins.
    """
    target = target.strip()
    if not target:
        raise ValueError("No address given")

    try:
        return str(ipaddress.ip_address(target))
    except ValueError:
        pass

    try:
        return socket.gethostbyname(target)
    except socket.gaierror as e:
        raise ValueError(f"Unknown host '{target}': {e}") from e

from __future__ import annotations

import argparse

from .logger import create_logger, verbosity_level
from .output import print_results
from .ports import DEFAULT_END, DEFAULT_START, build_range, end_port, start_port
from .scanner import default_concurrency, scan
from .targets import DEFAULT_ADDRESS, resolve_target


def _address(text: str) -> str:
    try:
        return resolve_target(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="port-sweep", description="Concurrent TCP connect port scanner")
    p.add_argument("-a", "--address", type=_address, default=DEFAULT_ADDRESS,
                   help=f"IP address or hostname to scan (default: {DEFAULT_ADDRESS})")
    p.add_argument("-s", "--start", type=start_port, default=DEFAULT_START,
                   help=f"First port, inclusive (default: {DEFAULT_START})")
    p.add_argument("-e", "--end", type=end_port, default=DEFAULT_END,
                   help=f"Last port, exclusive (default: {DEFAULT_END})")
    p.add_argument("--max-concurrency", type=int, default=None,
                   help="Simultaneous connect attempts, 0 for no cap (default: from the open-file limit)")
    p.add_argument("--timeout", type=float, default=None,
                   help="Connect timeout seconds (default: platform connect default)")
    p.add_argument("-v", "--verbose", action="count", default=0,
                   help="Log scan events to stderr (-v info, -vv per-port debug)")
    return p


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.max_concurrency is None:
        args.max_concurrency = default_concurrency()
    if args.max_concurrency < 0:
        parser.error("--max-concurrency must be >= 0")
    if args.timeout is not None and args.timeout <= 0:
        parser.error("--timeout must be > 0")

    try:
        port_range = build_range(args.start, args.end)
    except ValueError as e:
        parser.error(str(e))

    create_logger(verbosity_level(args.verbose))

    open_ports = scan(
        target=args.address,
        port_range=port_range,
        max_concurrency=args.max_concurrency,
        timeout=args.timeout,
    )

    print_results(open_ports)
    return 0

import argparse
import socket

import pytest

from port_sweep.models import PortRange
from port_sweep.output import format_row, print_results
from port_sweep.ports import build_range, end_port, start_port
from port_sweep.targets import resolve_target


def test_port_range_is_half_open():
    r = PortRange(10, 13)
    assert list(r) == [10, 11, 12]
    assert len(r) == 3
    assert 10 in r
    assert 13 not in r


def test_full_range_excludes_highest_port():
    r = PortRange(1, 65535)
    assert len(r) == 65534
    assert 65535 not in r


@pytest.mark.parametrize("start,end", [(0, 10), (1, 65536), (10, 5)])
def test_port_range_rejects_invalid_bounds(start, end):
    with pytest.raises(ValueError):
        PortRange(start, end)


def test_empty_range_is_valid():
    assert list(build_range(8, 8)) == []


def test_start_port_guard():
    assert start_port("1") == 1
    with pytest.raises(argparse.ArgumentTypeError, match="greater than 0"):
        start_port("0")
    with pytest.raises(argparse.ArgumentTypeError):
        start_port("65536")
    with pytest.raises(argparse.ArgumentTypeError):
        start_port("ssh")


def test_end_port_guard():
    assert end_port("65534") == 65534
    with pytest.raises(argparse.ArgumentTypeError, match="less than 65535"):
        end_port("65535")


def test_resolve_target_literals():
    assert resolve_target(" 127.0.0.1 ") == "127.0.0.1"
    assert resolve_target("::1") == "::1"


def test_resolve_target_hostname(monkeypatch):
    monkeypatch.setattr(socket, "gethostbyname", lambda name: "10.0.0.7")
    assert resolve_target("webapp") == "10.0.0.7"


def test_resolve_target_failure(monkeypatch):
    def fail(name):
        raise socket.gaierror(-2, "Name or service not known")

    monkeypatch.setattr(socket, "gethostbyname", fail)
    with pytest.raises(ValueError, match="Unknown host"):
        resolve_target("nowhere.invalid")
    with pytest.raises(ValueError):
        resolve_target("   ")


def test_format_row():
    assert format_row(8880) == "8880 is open"


def test_print_results_sorts_numerically(capsys):
    print_results([1000, 9, 80])
    assert capsys.readouterr().out == "\n9 is open\n80 is open\n1000 is open\n"


def test_print_results_empty(capsys):
    print_results([])
    assert capsys.readouterr().out == "\n"


def test_bad_port_text_keeps_cause():
    with pytest.raises(argparse.ArgumentTypeError) as exc:
        start_port("ssh")
    assert isinstance(exc.value.__cause__, ValueError)

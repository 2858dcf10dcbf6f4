import logging

import pytest

from port_sweep import scanner
from port_sweep.logger import LOGGER_NAME

from .net import FakeNetwork


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def fake_network(monkeypatch):
    def install(*args, **kwargs):
        net = FakeNetwork(*args, **kwargs)
        monkeypatch.setattr(scanner, "_connect", net.connect)
        return net
    return install

import logging
import pytest
from wgstatus.common.logger import get_logger, resolve_level


@pytest.mark.parametrize("name, expected", [
    ("DEBUG", logging.DEBUG),
    ("warning", logging.WARNING),
    (" error ", logging.ERROR),
    ("verbose", logging.INFO),
    ("", logging.INFO),
])
def test_resolve_level(name, expected):
    assert resolve_level(name) == expected


def test_get_logger_does_not_propagate_to_root():
    logger = get_logger("test")

    assert logger.name == "wgstatus.test"
    assert logging.getLogger("wgstatus").propagate is False
    assert len(logging.getLogger("wgstatus").handlers) == 1

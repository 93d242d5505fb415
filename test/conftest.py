import sys
import pytest
import logging
from qubitsim.log import get_logger, reset_call_order, CallOrderFilter, LOG_FORMAT
from qubitsim.simulation import ProbabilityEngine

SEP_STR = "#" * 150
qubitsim_logger = get_logger("qubitsim")


def pytest_addoption(parser):
    parser.addoption(
        "--runslow", action="store_true", default=False, help="run slow tests"
    )
    parser.addoption(
        "--showlogs",
        action="store_true",
        default=False,
        help="show qubitsim DEBUG logs even if tests pass",
    )
    parser.addoption(
        "--log_to_console",
        action="store_true",
        default=False,
        help="will log debugs to console"
    )


def pytest_configure(config):
    if config.getoption("--showlogs") or config.getoption("--log_to_console"):
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.DEBUG)
        console_handler.addFilter(CallOrderFilter())
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        qubitsim_logger.addHandler(console_handler)

    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    if config.getoption("--runslow"):
        return
    skip = pytest.mark.skip(reason="need --runslow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip)


@pytest.fixture(autouse=True)
def log_test_name(request):
    # start fresh numbering for this test
    reset_call_order()
    qubitsim_logger.debug(f"{SEP_STR}\nStarting test: {request.node.name}")


@pytest.fixture
def engine():
    """Seeded engine so statistical assertions are reproducible."""
    return ProbabilityEngine(seed=1234)

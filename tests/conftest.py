"""
Shared pytest fixtures for ringelection tests.
"""

import logging
from pathlib import Path

import pytest

from ringelection.logging_config import LOGGER_NAME


@pytest.fixture(scope="session")
def test_output_root() -> Path:
    """
    Returns the root test_output directory. Created once per test session.
    Files here persist after tests complete for easy access.
    """
    output_dir = Path(__file__).parent.parent / "test_output"
    output_dir.mkdir(exist_ok=True)
    return output_dir


@pytest.fixture
def test_output_dir(request, test_output_root) -> Path:
    """
    Returns a directory for the current test to write output files.
    Directory structure: test_output/<module_name>/<test_name>/
    """
    module_name = request.module.__name__.split(".")[-1]
    test_name = request.node.name

    test_dir = test_output_root / module_name / test_name
    test_dir.mkdir(parents=True, exist_ok=True)
    return test_dir


@pytest.fixture
def default_ids() -> list[int]:
    """The ring used by the command-line driver when no IDs are given."""
    return [5, 12, 3, 9, 7, 1, 10]


@pytest.fixture(autouse=True)
def reset_ringelection_logging():
    """Reset logging state before and after each test.

    Leaves only a NullHandler on the library logger and resets its level,
    so one test's logging configuration never leaks into another.
    """
    logger = logging.getLogger(LOGGER_NAME)

    def _reset():
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            if not isinstance(handler, logging.NullHandler):
                handler.close()
        logger.addHandler(logging.NullHandler())
        logger.setLevel(logging.NOTSET)

    _reset()
    yield
    _reset()

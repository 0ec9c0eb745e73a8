"""
Pytest configuration and fixtures for bf_runtime tests.
"""

import io
import os
import sys

import pytest

# Add grandparent directory to path for imports (to find bf_runtime package)
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from bf_runtime.interpreter import BFInterpreter


HELLO_WORLD = (
    "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]"
    ">>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."
)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests that run long programs (deselect with '-m \"not slow\"')"
    )


@pytest.fixture
def output():
    """In-memory output sink."""
    return io.BytesIO()


@pytest.fixture
def make_interpreter(output):
    """
    Build an interpreter reading from the given bytes and writing to the
    shared `output` fixture.
    """
    def factory(input_data=b"", **kwargs):
        return BFInterpreter(io.BytesIO(input_data), output, **kwargs)
    return factory


@pytest.fixture
def hello_world():
    return HELLO_WORLD

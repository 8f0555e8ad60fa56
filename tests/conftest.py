"""
Test bootstrap:
- Put src/ and tests/ on sys.path so the suite runs without installation
- Shared writer/reader fixtures
"""
import pathlib
import sys

import pytest

TESTS = pathlib.Path(__file__).resolve().parent
SRC = TESTS.parent / "src"

for path in (SRC, TESTS):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))


@pytest.fixture
def writer():
    """In-memory writer with no stream-level byte order."""
    from binpack import BinaryWriter
    return BinaryWriter()


@pytest.fixture
def reader_for():
    """Build an in-memory reader over the given bytes."""
    from binpack import BinaryReader

    def _make(data: bytes, byte_order=None):
        return BinaryReader(data, byte_order)

    return _make


@pytest.fixture(params=["little", "big"])
def byte_order(request):
    """Run a test once per byte order."""
    from binpack import ByteOrder
    return ByteOrder(request.param)

"""
Test bootstrap:
- Make src/ and tests/ importable at collection time
- Provide the mock chain client, dev key and chain reference fixtures
"""
import sys
import pathlib
import pytest

TESTS = pathlib.Path(__file__).parent.resolve()
SRC = TESTS.parent / "src"

for path in (SRC, TESTS):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))


@pytest.fixture
def mock_client():
    """Provide a mock chain client."""
    from helpers.mocks import MockChainClient
    return MockChainClient()


@pytest.fixture
def dev_key():
    """Provide the development private key as text."""
    from helpers.factories import DEV_PRIVATE_KEY
    return DEV_PRIVATE_KEY


@pytest.fixture
def reference():
    """Provide a chain reference on the mainnet chain id."""
    from helpers.factories import mk_reference
    return mk_reference()


@pytest.fixture
def header(reference):
    """Provide a header derived from the reference fixture."""
    from helpers.factories import mk_header
    return mk_header(reference)

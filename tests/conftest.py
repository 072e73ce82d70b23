import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Keep structlog's global config from leaking between tests.

    The CLI configures structlog to print to the CliRunner's stderr, which is
    closed once the invocation ends.
    """
    yield
    structlog.reset_defaults()

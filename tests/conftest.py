"""
Pytest configuration and shared fixtures for the web user agent tests.

1. Adds the project root and tests root to sys.path
2. Provides a stub transport and a recording diagnostic sink
"""

import sys
from pathlib import Path

import pytest

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

from fixtures.transport import DiagnosticRecorder, StubTransport  # noqa: E402
from webagent.core.http_client import WebUserAgent  # noqa: E402


@pytest.fixture
def transport() -> StubTransport:
    return StubTransport()


@pytest.fixture
def diagnostics() -> DiagnosticRecorder:
    return DiagnosticRecorder()


@pytest.fixture
def agent(transport, diagnostics) -> WebUserAgent:
    return WebUserAgent(
        session_factory=transport.session_factory,
        diagnostic_sink=diagnostics,
    )

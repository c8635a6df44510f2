"""
Pytest configuration and shared fixtures.
"""

import pytest


@pytest.fixture
def host():
    """In-memory host that records output, blocks and sounds."""
    from tickcore.host import InMemoryHost
    return InMemoryHost()


@pytest.fixture
def context(host):
    """Context with default configuration reporting to the in-memory host."""
    from tickcore.core import ScriptContext
    return ScriptContext(host=host)


@pytest.fixture
def traced_context(host):
    """Context that records every callback in a trace."""
    from tickcore.core import ContextConfig, ScriptContext
    return ScriptContext(host=host, config=ContextConfig(record_trace=True))


@pytest.fixture
def calls():
    """List that callbacks append to, for asserting order and counts."""
    return []

"""Basic import tests to verify package structure."""


def test_import_tickcore():
    """Verify main package imports."""
    import tickcore
    assert tickcore.__version__ == "0.1.0"


def test_import_core():
    """Verify core module structure exists."""
    from tickcore import core
    assert hasattr(core, "ScriptContext")
    assert hasattr(core, "TimerQueue")
    assert hasattr(core, "MessageDispatcher")


def test_import_host():
    from tickcore import host
    assert hasattr(host, "InMemoryHost")


def test_import_analysis():
    """Verify analysis module structure exists."""
    from tickcore import analysis
    assert hasattr(analysis, "__doc__")

"""Script-facing API over a context."""

from tickcore.script.api import ScriptAPI

__all__ = ["ScriptAPI"]

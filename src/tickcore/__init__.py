"""
tickcore: deterministic, tick-driven event core for embedded game scripts.

The host advances a virtual clock once per step and hands over the
messages it produced since the last step. Scripts react through:
- Timers: one-shot and repeating callbacks against the virtual clock
- Message handlers: callbacks subscribed to a message type tag

Everything runs synchronously inside the host's advance() call. There are
no threads, no wall-clock reads and no blocking.
"""

__version__ = "0.1.0"

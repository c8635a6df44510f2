"""
Messages and the subscription registry.

The host hands the core a batch of tagged records every step. The core
never looks inside a message beyond its type tag: it only routes each
message to the handlers subscribed to that tag, in subscription order.

While one message is being delivered, the handler list for its type is a
snapshot. Handlers added or removed during that delivery take effect for
the next message of the same type.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping, TYPE_CHECKING
import json
import logging
from types import MethodType

from tickcore.core.errors import CallbackFailure

if TYPE_CHECKING:
    from tickcore.core.trace import TraceRecorder

logger = logging.getLogger(__name__)

MessageType = str

# Key carrying the type tag in the host's serialized messages
WIRE_TYPE_KEY = "T"


@dataclass
class Message:
    """
    A tagged record emitted by the host.

    The fields are opaque to the core. Handlers read them with
    msg["name"] or msg.get("name").
    """

    type: MessageType
    fields: dict[str, Any] = field(default_factory=dict)

    def __getitem__(self, name: str) -> Any:
        return self.fields[name]

    def __contains__(self, name: object) -> bool:
        return name in self.fields

    def get(self, name: str, default: Any = None) -> Any:
        return self.fields.get(name, default)

    @classmethod
    def from_mapping(
        cls, data: Mapping[str, Any], type_key: str = WIRE_TYPE_KEY
    ) -> "Message":
        """Build from the host wire shape {"T": tag, ...fields}."""
        if type_key not in data:
            raise ValueError(f"Message has no {type_key!r} type tag: {dict(data)!r}")
        fields = {k: v for k, v in data.items() if k != type_key}
        return cls(type=str(data[type_key]), fields=fields)

    def to_mapping(self, type_key: str = WIRE_TYPE_KEY) -> dict[str, Any]:
        """Inverse of from_mapping."""
        return {type_key: self.type, **self.fields}


def decode_batch(payload: str | bytes, type_key: str = WIRE_TYPE_KEY) -> list[Message]:
    """
    Decode a JSON array of wire messages, preserving order.

    Raises:
        ValueError: payload is not a JSON array of objects with a type tag
    """
    data = json.loads(payload)
    if not isinstance(data, list):
        raise ValueError("Message batch must be a JSON array")
    return [Message.from_mapping(item, type_key) for item in data]


MessageHandler = Callable[[Message], None]
FailureReporter = Callable[[CallbackFailure], None]


@dataclass
class DeliveryPass:
    """What one dispatch_one() or dispatch_batch() call did."""

    messages: int = 0
    deliveries: int = 0  # Handler invocations
    failures: list[CallbackFailure] = field(default_factory=list)


def _log_failure(failure: CallbackFailure) -> None:
    logger.warning("%s", failure, exc_info=failure.error)


def _same_handler(a: MessageHandler, b: MessageHandler) -> bool:
    """Identity, except that two bound methods of one object and function match."""
    if a is b:
        return True
    return (
        isinstance(a, MethodType)
        and isinstance(b, MethodType)
        and a.__self__ is b.__self__
        and a.__func__ is b.__func__
    )


class MessageDispatcher:
    """
    Registry of message handlers keyed by type tag.

    The same handler subscribed twice is two subscriptions and is called
    twice per message. Removal matches by identity; a bound method also
    matches a fresh reference to the same method of the same object.

    Args:
        on_failure: Called with a CallbackFailure whenever a handler raises.
            Defaults to a logger warning.
        trace: Optional recorder that sees every delivery
    """

    def __init__(
        self,
        on_failure: FailureReporter | None = None,
        trace: "TraceRecorder | None" = None,
    ):
        self._handlers: dict[MessageType, list[MessageHandler]] = {}
        self._on_failure = on_failure or _log_failure
        self.trace = trace
        self.now: int = 0  # Stamped on trace events

    def __len__(self) -> int:
        """Total number of subscriptions across all types."""
        return sum(len(hs) for hs in self._handlers.values())

    def types(self) -> list[MessageType]:
        """Types that currently have at least one subscriber."""
        return [t for t, hs in self._handlers.items() if hs]

    def handlers(self, msg_type: MessageType) -> list[MessageHandler]:
        """Copy of the handler list for a type."""
        return list(self._handlers.get(msg_type, ()))

    def subscribe(self, msg_type: MessageType, handler: MessageHandler) -> None:
        """Append handler to the list for msg_type."""
        self._handlers.setdefault(msg_type, []).append(handler)

    def unsubscribe(self, msg_type: MessageType, handler: MessageHandler) -> None:
        """Remove every subscription of handler to msg_type. No-op if none."""
        current = self._handlers.get(msg_type)
        if current is None:
            return
        self._handlers[msg_type] = [h for h in current if not _same_handler(h, handler)]

    def clear_all(self) -> None:
        """Drop every subscription for every type."""
        self._handlers.clear()

    def dispatch_one(
        self, message: Message, result: DeliveryPass | None = None
    ) -> DeliveryPass:
        """
        Deliver one message to its subscribers, in subscription order.

        Unknown types are ignored silently. A raising handler is reported
        and the remaining handlers still run.

        Args:
            message: The message to route
            result: Accumulator to add to (a fresh one if None)
        """
        if result is None:
            result = DeliveryPass()
        result.messages += 1

        for handler in tuple(self._handlers.get(message.type, ())):
            if self.trace is not None:
                self.trace.record(self.now, "message", message.type)
            result.deliveries += 1
            try:
                handler(message)
            except Exception as exc:
                failure = CallbackFailure("message", message.type, exc)
                result.failures.append(failure)
                self._on_failure(failure)
        return result

    def dispatch_batch(self, messages: Iterable[Message]) -> DeliveryPass:
        """Deliver each message in order."""
        result = DeliveryPass()
        for message in messages:
            self.dispatch_one(message, result)
        return result

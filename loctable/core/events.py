"""
Event system for loctable.

Components publish events ("language.changed", "table.imported", ...) and
interested parties subscribe to the patterns they care about. Runtime text
bindings use this to refresh when the active language changes, instead of
reaching for a process-wide manager.
"""

from __future__ import annotations

import fnmatch
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)

# Handlers may return follow-up events, or None when they have nothing to add
EventHandler = Callable[["Event"], Awaitable["list[Event] | None"]]


@dataclass
class Event:
    """
    An event in the system.

    Events are immutable records of something that happened. They carry
    all the context needed for handlers to process them.
    """

    event_type: str  # e.g., "language.changed", "table.scanned"
    payload: dict[str, Any] = field(default_factory=dict)

    # Tracing
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    correlation_id: str | None = None

    # Timing
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, Any]:
        """Serialize event to dictionary."""
        return {
            "id": self.id,
            "event_type": self.event_type,
            "payload": self.payload,
            "correlation_id": self.correlation_id,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Event:
        """Deserialize event from dictionary."""
        return cls(
            id=data["id"],
            event_type=data["event_type"],
            payload=data.get("payload", {}),
            correlation_id=data.get("correlation_id"),
            timestamp=datetime.fromisoformat(data["timestamp"]),
        )


@dataclass
class Subscription:
    """A subscription to events matching a pattern."""

    pattern: str  # e.g., "language.*" or "table.imported"
    handler: EventHandler
    filter: dict[str, Any] = field(default_factory=dict)  # payload filters

    def matches(self, event: Event) -> bool:
        """Check if this subscription matches the given event."""
        if not fnmatch.fnmatch(event.event_type, self.pattern):
            return False

        for key, value in self.filter.items():
            if event.payload.get(key) != value:
                return False

        return True


class EventBus:
    """
    In-memory event bus.

    Handlers run one after another in subscription order. A failing handler
    is logged and does not stop the others.
    """

    def __init__(self, max_history: int = 1000):
        self._subscriptions: list[Subscription] = []
        self._event_history: list[Event] = []
        self._max_history = max_history

    def subscribe(
        self,
        pattern: str,
        handler: EventHandler,
        filter: dict[str, Any] | None = None,
    ) -> Subscription:
        """
        Subscribe to events matching a pattern.

        Args:
            pattern: Event type pattern (supports wildcards like "table.*")
            handler: Async function to handle matching events
            filter: Payload values that must match (e.g., {"language": "ro"})

        Returns:
            The subscription object (can be used to unsubscribe)
        """
        subscription = Subscription(
            pattern=pattern,
            handler=handler,
            filter=filter or {},
        )
        self._subscriptions.append(subscription)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove a subscription."""
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    @property
    def subscription_count(self) -> int:
        return len(self._subscriptions)

    async def publish(self, event: Event) -> list[Event]:
        """
        Publish an event and return any events produced by handlers.

        Handlers can return new events, which are then also published.
        """
        self._event_history.append(event)
        if len(self._event_history) > self._max_history:
            self._event_history = self._event_history[-self._max_history:]

        # Snapshot so handlers may (un)subscribe while we dispatch
        matching = [s for s in self._subscriptions if s.matches(event)]

        all_resulting_events: list[Event] = []

        for subscription in matching:
            try:
                resulting_events = await subscription.handler(event)
            except Exception:
                logger.exception(f"Error in event handler for {event.event_type}")
                continue
            if resulting_events:
                all_resulting_events.extend(resulting_events)

        for resulting_event in list(all_resulting_events):
            cascade_events = await self.publish(resulting_event)
            all_resulting_events.extend(cascade_events)

        return all_resulting_events

    def get_history(self, event_type: str | None = None, limit: int = 100) -> list[Event]:
        """Query event history with an optional type pattern."""
        results = self._event_history

        if event_type:
            results = [e for e in results if fnmatch.fnmatch(e.event_type, event_type)]

        return results[-limit:]


# Default bus used by the API app wiring
_default_bus: EventBus | None = None


def get_event_bus() -> EventBus:
    """Get the default event bus instance."""
    global _default_bus
    if _default_bus is None:
        _default_bus = EventBus()
    return _default_bus


def reset_event_bus() -> None:
    """Reset the default event bus (useful for testing)."""
    global _default_bus
    _default_bus = None


# Convenience constructors for the events loctable emits
def language_changed(language: str, entries: int) -> Event:
    """Create a language.changed event."""
    return Event(
        event_type="language.changed",
        payload={"language": language, "entries": entries},
    )


def table_scanned(processed: int, failed: int, **extra_payload) -> Event:
    """Create a table.scanned event."""
    return Event(
        event_type="table.scanned",
        payload={"processed": processed, "failed": failed, **extra_payload},
    )


def table_imported(touched: int, languages: list[str], **extra_payload) -> Event:
    """Create a table.imported event."""
    return Event(
        event_type="table.imported",
        payload={"touched": touched, "languages": languages, **extra_payload},
    )

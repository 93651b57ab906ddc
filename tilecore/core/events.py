"""
Typed event bus for decoupled communication.

Uses Enums for event types to prevent magic strings. The game state
publishes lifecycle events (level loads, deaths, kills); the window
driver and tests listen without the simulation knowing about them.

Usage:
    # Subscribe
    event_bus.subscribe(GameEvent.LEVEL_LOADED, on_level_loaded)

    # Publish
    event_bus.publish(GameEvent.LEVEL_LOADED, level=3, index=0)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable


logger = logging.getLogger(__name__)


class GameEvent(Enum):
    """Built-in simulation events."""
    # Level flow
    LEVEL_LOADED = auto()   # level, index
    GOAL_REACHED = auto()   # level

    # Avatar
    AVATAR_RESET = auto()
    AVATAR_DIED = auto()    # x, y

    # Enemies
    ENEMY_SPAWNED = auto()  # enemy
    ENEMY_KILLED = auto()   # enemy


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: The event type (Enum member)
        data: Dictionary of event-specific data
    """
    type: Enum
    data: dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        """Get event data by key."""
        return self.data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        """Get event data by key (dict-style)."""
        return self.data[key]


# Type alias for event handlers
EventHandler = Callable[[Event], None]


class EventBus:
    """
    Central event bus for publish/subscribe messaging.

    Handlers run synchronously in subscription order. A handler that
    raises is logged and the remaining handlers still run.
    """

    def __init__(self):
        self._handlers: dict[Enum, list[EventHandler]] = {}

    def subscribe(self, event_type: Enum, handler: EventHandler) -> None:
        """
        Subscribe to an event type.

        Args:
            event_type: The event type to listen for
            handler: Callback function(event: Event)
        """
        self._handlers.setdefault(event_type, []).append(handler)

    def unsubscribe(self, event_type: Enum, handler: EventHandler) -> None:
        """
        Unsubscribe from an event type.

        Args:
            event_type: The event type
            handler: The handler to remove
        """
        if event_type not in self._handlers:
            return

        self._handlers[event_type] = [
            h for h in self._handlers[event_type] if h != handler
        ]

    def publish(self, event_type: Enum, **data: Any) -> Event:
        """
        Publish an event.

        Args:
            event_type: The event type
            **data: Event data as keyword arguments

        Returns:
            The Event object
        """
        event = Event(type=event_type, data=data)

        # Copy so handlers may unsubscribe while being called
        for handler in list(self._handlers.get(event_type, ())):
            try:
                handler(event)
            except Exception:
                # A broken listener must not stop the frame
                logger.exception(f"Error in event handler for {event.type}")

        return event

    def clear(self, event_type: Enum | None = None) -> None:
        """
        Clear handlers.

        Args:
            event_type: If specified, only clear handlers for this type.
                       If None, clear all handlers.
        """
        if event_type is None:
            self._handlers.clear()
        elif event_type in self._handlers:
            del self._handlers[event_type]

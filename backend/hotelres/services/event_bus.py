"""
Event bus - in-memory publish/subscribe
Carries reservation status changes, session changes and role changes
"""
from typing import Callable, Dict, List, Any, Optional
from dataclasses import dataclass, field
from datetime import datetime
from collections import deque
import logging
import threading
import uuid

from hotelres.models.events import EventType, BaseEventData

logger = logging.getLogger(__name__)


@dataclass
class Event:
    """Published event"""
    event_type: str
    timestamp: datetime
    data: Dict[str, Any]
    source: str  # publishing service
    event_id: str = field(default_factory=lambda: uuid.uuid4().hex)


def make_event(event_type: EventType, data: BaseEventData, source: str) -> Event:
    return Event(
        event_type=event_type.value,
        timestamp=data.timestamp,
        data=data.to_dict(),
        source=source,
    )


class EventBus:
    """
    In-memory event bus (thread-safe singleton)

    Usage:
    1. event_bus.subscribe("reservation.confirmed", handler)
    2. event_bus.publish(Event(...))
    3. event_bus.unsubscribe("reservation.confirmed", handler)
    """

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return
        self._subscribers: Dict[str, List[Callable]] = {}
        self._event_history: deque = deque(maxlen=100)
        self._subscriber_lock = threading.Lock()
        self._initialized = True
        logger.info("EventBus initialized")

    def subscribe(self, event_type: str, handler: Callable[[Event], None]) -> None:
        with self._subscriber_lock:
            handlers = self._subscribers.setdefault(event_type, [])
            if handler not in handlers:
                handlers.append(handler)
                logger.info(f"Handler {getattr(handler, '__name__', handler)} subscribed to {event_type}")

    def unsubscribe(self, event_type: str, handler: Callable[[Event], None]) -> None:
        with self._subscriber_lock:
            handlers = self._subscribers.get(event_type, [])
            if handler in handlers:
                handlers.remove(handler)
                logger.info(f"Handler {getattr(handler, '__name__', handler)} unsubscribed from {event_type}")

    def publish(self, event: Event) -> None:
        """
        Run every handler synchronously

        A failing handler is logged and does not stop the others, nor the
        operation that published the event.
        """
        self._event_history.append(event)

        with self._subscriber_lock:
            handlers = self._subscribers.get(event.event_type, []).copy()

        if handlers:
            logger.info(f"Publishing {event.event_type} to {len(handlers)} handlers")

        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                logger.error(
                    f"Event handler {getattr(handler, '__name__', handler)} error for {event.event_type}: {e}",
                    exc_info=True
                )

    def get_history(self, event_type: Optional[str] = None, limit: int = 50) -> List[Event]:
        """Recent events, newest first"""
        history = list(self._event_history)
        if event_type:
            history = [e for e in history if e.event_type == event_type]
        return list(reversed(history))[:limit]

    def clear_subscribers(self) -> None:
        """Drop every subscription (tests)"""
        with self._subscriber_lock:
            self._subscribers.clear()

    def clear_history(self) -> None:
        self._event_history.clear()


# Global event bus
event_bus = EventBus()

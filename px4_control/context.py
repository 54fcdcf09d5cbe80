"""In-process publish/subscribe primitives and the context shared by setpoint types."""

from __future__ import annotations

import logging
import threading
import time
from collections import deque
from typing import Any, Callable, Optional

MessageCallback = Callable[[Any], None]


class _Bus:
    """Routes messages between publishers and subscriptions by topic name."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._publishers: dict[str, list[Publisher]] = {}
        self._subscriptions: dict[str, list[Subscription]] = {}

    def add_publisher(self, publisher: Publisher) -> None:
        with self._lock:
            self._publishers.setdefault(publisher.topic, []).append(publisher)

    def add_subscription(self, subscription: Subscription) -> None:
        with self._lock:
            self._subscriptions.setdefault(subscription.topic, []).append(subscription)

    def publisher_count(self, topic: str) -> int:
        with self._lock:
            return len(self._publishers.get(topic, ()))

    def subscription_count(self, topic: str) -> int:
        with self._lock:
            return len(self._subscriptions.get(topic, ()))

    def deliver(self, topic: str, message: Any) -> None:
        with self._lock:
            targets = list(self._subscriptions.get(topic, ()))
        for subscription in targets:
            subscription._deliver(message)


def _check_depth(depth: int) -> int:
    if depth < 1:
        raise ValueError(f"queue depth must be at least 1, got {depth}")
    return depth


class Publisher:
    """Sends messages to every subscription on its topic."""

    def __init__(self, bus: _Bus, topic: str, depth: int) -> None:
        self.topic = topic
        self.depth = _check_depth(depth)
        self.published: list[Any] = []
        self._bus = bus
        bus.add_publisher(self)

    def publish(self, message: Any) -> None:
        """Record the message and hand it to all matching subscriptions."""
        self.published.append(message)
        self._bus.deliver(self.topic, message)

    def subscription_count(self) -> int:
        """Number of subscriptions listening on this topic."""
        return self._bus.subscription_count(self.topic)


class Subscription:
    """Receives messages of one topic into a bounded queue."""

    def __init__(
        self,
        bus: _Bus,
        topic: str,
        callback: Optional[MessageCallback],
        depth: int,
    ) -> None:
        self.topic = topic
        self.depth = _check_depth(depth)
        self._callback = callback
        self._queue: deque[Any] = deque(maxlen=depth)
        self._cond = threading.Condition()
        self._bus = bus
        bus.add_subscription(self)

    def _deliver(self, message: Any) -> None:
        with self._cond:
            self._queue.append(message)
            self._cond.notify_all()
        if self._callback is not None:
            self._callback(message)

    def take(self) -> Optional[Any]:
        """Remove and return the oldest queued message, or None if there is none."""
        with self._cond:
            return self._queue.popleft() if self._queue else None

    def wait(self, timeout_s: float) -> bool:
        """Block until a message is queued or the timeout passes; True if one is ready."""
        with self._cond:
            return self._cond.wait_for(lambda: bool(self._queue), timeout=max(timeout_s, 0.0))

    def publisher_count(self) -> int:
        """Number of publishers sending on this topic."""
        return self._bus.publisher_count(self.topic)


class Node:
    """A named participant on a message bus with its own clock and logger."""

    def __init__(
        self,
        name: str = "node",
        *,
        bus: Optional[_Bus] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.name = name
        self.bus = bus if bus is not None else _Bus()
        self._clock = clock if clock is not None else time.monotonic
        self.logger = logging.getLogger(f"px4_control.{name}")

    def create_publisher(self, topic: str, depth: int) -> Publisher:
        return Publisher(self.bus, topic, depth)

    def create_subscription(
        self, topic: str, callback: Optional[MessageCallback], depth: int
    ) -> Subscription:
        return Subscription(self.bus, topic, callback, depth)

    def now(self) -> float:
        """Current time of the node's clock, in seconds."""
        return self._clock()


class Context:
    """Node and topic namespace shared by the components of a mode."""

    def __init__(self, node: Node, topic_namespace_prefix: str = "") -> None:
        self._node = node
        self._topic_namespace_prefix = topic_namespace_prefix
        self._setpoint_types: list[Any] = []
        self._requirements: list[Any] = []

    @property
    def node(self) -> Node:
        return self._node

    @property
    def topic_namespace_prefix(self) -> str:
        return self._topic_namespace_prefix

    @property
    def setpoint_types(self) -> tuple[Any, ...]:
        """Setpoint types created with this context, in creation order."""
        return tuple(self._setpoint_types)

    @property
    def requirements(self) -> tuple[Any, ...]:
        """Requirement flags declared by components, in declaration order."""
        return tuple(self._requirements)

    def add_setpoint_type(self, setpoint: Any) -> None:
        """Record a setpoint type created with this context."""
        self._setpoint_types.append(setpoint)

    def set_requirement(self, requirement_flags: Any) -> None:
        """Record requirement flags declared by a component."""
        self._requirements.append(requirement_flags)
"""Publish/subscribe event bus shared by the host and its plugins.

Plugins subscribe responders to named events and the host triggers them,
either for their side effects (``trigger``) or to collect an answer
(``trigger_sync``).

Event names used by the string plugin:
    - typhonjs:oclif:system:handler:flag:add
    - typhonjs:oclif:bundle:plugins:main:input:get
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import structlog

logger = structlog.get_logger()


@dataclass(frozen=True)
class Subscription:
    """A callback registered for an event.

    Attributes:
        name: The event name.
        callback: Function called when the event is triggered.
        context: Owner of the subscription, used for bulk removal.
    """

    name: str
    callback: Callable[..., Any]
    context: Any = None


class EventBus:
    """Synchronous event bus.

    Subscriber exceptions propagate to whoever triggered the event.

    Example:
        bus = EventBus()
        bus.on("app:answer:get", lambda: 42)
        bus.trigger_sync("app:answer:get")  # 42
    """

    def __init__(self, name: str = "eventbus") -> None:
        self.name = name
        self._events: dict[str, list[Subscription]] = {}

    def on(
        self,
        name: str,
        callback: Callable[..., Any],
        context: Any = None,
    ) -> Subscription:
        """Subscribe ``callback`` to the event ``name``.

        Returns:
            The created subscription.
        """
        subscription = Subscription(name=name, callback=callback, context=context)
        self._events.setdefault(name, []).append(subscription)
        logger.debug("eventbus_subscribed", eventbus=self.name, event_name=name)
        return subscription

    def off(
        self,
        name: str | None = None,
        callback: Callable[..., Any] | None = None,
        context: Any = None,
    ) -> int:
        """Remove subscriptions matching every given criterion.

        With no arguments all subscriptions are removed.

        Returns:
            Number of subscriptions removed.
        """
        removed = 0
        names = [name] if name is not None else list(self._events)
        for event_name in names:
            subscriptions = self._events.get(event_name, [])
            kept = [
                sub
                for sub in subscriptions
                if (callback is not None and sub.callback != callback)
                or (context is not None and sub.context is not context)
            ]
            removed += len(subscriptions) - len(kept)
            if kept:
                self._events[event_name] = kept
            else:
                self._events.pop(event_name, None)
        return removed

    def trigger(self, name: str, /, *args: Any, **kwargs: Any) -> None:
        """Call every subscriber of ``name`` with the given arguments."""
        for subscription in list(self._events.get(name, [])):
            subscription.callback(*args, **kwargs)

    def trigger_sync(self, name: str, /, *args: Any, **kwargs: Any) -> Any:
        """Call every subscriber of ``name`` and collect their answers.

        Returns:
            None when no subscriber answers, the answer itself when exactly
            one does, otherwise a list of all non-None answers.
        """
        results = []
        for subscription in list(self._events.get(name, [])):
            result = subscription.callback(*args, **kwargs)
            if result is not None:
                results.append(result)

        if not results:
            return None
        if len(results) == 1:
            return results[0]
        return results

    def has_subscribers(self, name: str) -> bool:
        """Return True if at least one callback is subscribed to ``name``."""
        return bool(self._events.get(name))

    def subscriber_count(self, name: str) -> int:
        """Return the number of callbacks subscribed to ``name``."""
        return len(self._events.get(name, []))

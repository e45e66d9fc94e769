from collections import defaultdict
import logging
from typing import Callable, DefaultDict, List, Type


Handler = Callable[[object], None]


class EventBus:
    """Synchronous in-process publish/subscribe with isolated handlers.

    Handlers run in subscription order. A failing handler is logged and
    skipped; the publisher never sees the error.
    """

    def __init__(self) -> None:
        self._subscribers: DefaultDict[Type[object], List[Handler]] = defaultdict(list)
        self._last_publish_errors: List[Exception] = []
        self._logger = logging.getLogger(__name__)

    def subscribe(self, event_type: Type[object], handler: Handler) -> None:
        self._subscribers[event_type].append(handler)

    def publish(self, event: object) -> int:
        self._last_publish_errors = []
        delivered = 0
        for handler in list(self._subscribers[type(event)]):
            try:
                handler(event)
                delivered += 1
            except Exception as exc:
                self._last_publish_errors.append(exc)
                self._logger.exception(
                    "Event handler failed and was isolated",
                    extra={
                        "event_type": type(event).__name__,
                        "handler": getattr(handler, "__qualname__", repr(handler)),
                    },
                )
        return delivered

    def last_publish_errors(self) -> List[Exception]:
        return list(self._last_publish_errors)

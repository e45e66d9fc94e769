from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from combiner.application.services.event_bus import EventBus
from combiner.domain.events import CombinationDiscovered, CombinationRepeated


ActivitySink = Callable[[str, Dict[str, Any]], None]

ACTIVITY_DISCOVERED = "combination_discovered"
ACTIVITY_REPEATED = "combination_repeated"

logger = logging.getLogger(__name__)


def activity_details(event: CombinationDiscovered | CombinationRepeated) -> Dict[str, Any]:
    return {
        "label": event.label,
        "ancestors": list(event.ancestors),
        "count": int(event.count),
    }


def register_activity_handlers(event_bus: EventBus, sink: Optional[ActivitySink] = None) -> None:
    """Forward combination events to an activity sink, or just log them."""

    def _on_discovered(event: CombinationDiscovered) -> None:
        logger.info("Combination discovered", extra=activity_details(event))
        if sink is not None:
            sink(ACTIVITY_DISCOVERED, activity_details(event))

    def _on_repeated(event: CombinationRepeated) -> None:
        logger.debug("Combination repeated", extra=activity_details(event))
        if sink is not None:
            sink(ACTIVITY_REPEATED, activity_details(event))

    event_bus.subscribe(CombinationDiscovered, _on_discovered)
    event_bus.subscribe(CombinationRepeated, _on_repeated)

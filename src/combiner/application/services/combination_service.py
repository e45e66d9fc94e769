from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Callable, Iterable, List, Optional, Set

from combiner.application.dtos import LedgerEntryView
from combiner.application.services.combination_ledger import CombinationLedger
from combiner.application.services.combination_tables import BASE_ELEMENTS
from combiner.application.services.cooldown_guard import CooldownGuard
from combiner.application.services.event_bus import EventBus
from combiner.application.services.resolution_pipeline import ResolutionPipeline
from combiner.domain.events import CombinationDiscovered, CombinationRepeated
from combiner.domain.models.entity import Entity, combined_ancestry


def seed_base_elements() -> List[Entity]:
    return [
        Entity(
            id=preset.word.lower(),
            name=preset.word,
            icon=preset.icon,
            translations=dict(preset.translations),
            is_base=True,
        )
        for preset in BASE_ELEMENTS
    ]


def _new_entity_id() -> str:
    return f"combined-{uuid.uuid4().hex[:12]}"


class CombinationSession:
    """One player's combination state: the board, the gates, and the pipeline.

    ``combine`` returns the derived entity, or None when the attempt is
    ignored (cooldown active or another resolution still running). Ledger
    writes run as detached tasks and never delay or fail a combination.
    """

    def __init__(
        self,
        pipeline: ResolutionPipeline,
        guard: CooldownGuard,
        ledger: Optional[CombinationLedger] = None,
        event_bus: Optional[EventBus] = None,
        elements: Optional[Iterable[Entity]] = None,
        id_factory: Callable[[], str] = _new_entity_id,
    ) -> None:
        self.pipeline = pipeline
        self.guard = guard
        self.ledger = ledger
        self.event_bus = event_bus
        self.elements: List[Entity] = list(elements) if elements is not None else seed_base_elements()
        self._id_factory = id_factory
        self._background: Set[asyncio.Task] = set()
        self._logger = logging.getLogger(__name__)

    def find(self, label: str) -> Optional[Entity]:
        wanted = str(label or "").strip().lower()
        for entity in reversed(self.elements):
            if entity.name.lower() == wanted or entity.id == label:
                return entity
        return None

    def _replace(self, updated: Entity) -> None:
        for index, entity in enumerate(self.elements):
            if entity.id == updated.id:
                self.elements[index] = updated
                return

    async def combine(self, first: Entity, second: Entity) -> Optional[Entity]:
        stamped = self.guard.begin_attempt(first, second)
        if stamped is None:
            return None
        first, second = stamped
        self._replace(first)
        self._replace(second)

        try:
            result = await self.pipeline.resolve(first.name, second.name)
            derived = Entity(
                id=self._id_factory(),
                name=result.word,
                icon=result.icon,
                translations=dict(result.translations),
                combined_from=combined_ancestry(first, second),
                last_combined_at=self.guard.now(),
                rarity=result.rarity,
                domain=result.domain,
            )
            self.elements.append(derived)
            self._spawn_ledger_write(derived)
            return derived
        finally:
            self.guard.release_later()

    def _spawn_ledger_write(self, entity: Entity) -> None:
        if self.ledger is None:
            return
        task = asyncio.get_running_loop().create_task(self._record(entity))
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    async def _record(self, entity: Entity) -> None:
        try:
            record = await self.ledger.record_occurrence(entity.name)
        except Exception:
            self._logger.exception("Ledger write failed; combination result unaffected", extra={"label": entity.name})
            return

        if self.event_bus is None:
            return
        event_type = CombinationDiscovered if record.is_first_discovery else CombinationRepeated
        self.event_bus.publish(event_type(label=record.label, ancestors=entity.combined_from, count=record.count))

    async def drain(self) -> None:
        """Wait for detached ledger writes, e.g. before shutdown."""
        if self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)

    async def close(self) -> None:
        await self.drain()
        client = self.pipeline.text_client
        if client is not None:
            await client.close()

    async def top_combinations(self, limit: int = 10) -> List[LedgerEntryView]:
        if self.ledger is None:
            return []
        records = await self.ledger.top(limit)
        return [LedgerEntryView(label=record.label, count=record.count) for record in records]

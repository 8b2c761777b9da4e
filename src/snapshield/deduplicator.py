"""Deduplicator — turns the union of raw detections into one clean entity list.

Detectors run independently and happily claim the same characters: a date
detector finds "Jan 17, 2026" while the quantity detector finds "17" inside
it.  Overlaps are grouped into clusters.  Within a cluster, entities are
taken best first (type priority, then span length, then earliest start) and
each is kept unless it overlaps one already kept, so a chain such as
address / quantity / email keeps both ends when only the middle conflicts.

The enabled-type filter runs *after* conflict resolution.  If a disabled
type wins an overlap, its span is left alone; the candidates it beat are
not brought back.
"""

from __future__ import annotations
import logging
from typing import Iterable, Mapping

from .kinds import DEFAULT_PRIORITIES
from .types import DetectedEntity, EntityType

logger = logging.getLogger(__name__)


class Deduplicator:
    """Priority-based overlap resolution."""

    def __init__(self, priorities: Mapping[EntityType | str, int] | None = None) -> None:
        self.priorities: dict[EntityType, int] = dict(DEFAULT_PRIORITIES)
        for entity_type, priority in (priorities or {}).items():
            self.priorities[EntityType.parse(entity_type)] = int(priority)

    def priority(self, entity: DetectedEntity) -> int:
        return self.priorities.get(entity.type, 0)

    def _rank(self, entity: DetectedEntity) -> tuple:
        # Highest priority, then longest span, then earliest start, then confidence.
        return (self.priority(entity), entity.length, -entity.start, entity.confidence)

    def clusters(self, entities: Iterable[DetectedEntity]) -> list[list[DetectedEntity]]:
        """Group entities into runs of transitively overlapping spans."""
        ordered = sorted(entities, key=lambda e: (e.start, -e.length))
        groups: list[list[DetectedEntity]] = []
        cluster_end = -1
        for entity in ordered:
            if groups and entity.start < cluster_end:
                groups[-1].append(entity)
                cluster_end = max(cluster_end, entity.end)
            else:
                groups.append([entity])
                cluster_end = entity.end
        return groups

    def deduplicate(self, entities: Iterable[DetectedEntity]) -> list[DetectedEntity]:
        """Non-overlapping survivors, ascending by start.

        An entity is dropped only when it overlaps a better-ranked entity
        that was kept.
        """
        winners: list[DetectedEntity] = []
        for cluster in self.clusters(entities):
            kept: list[DetectedEntity] = []
            for entity in sorted(cluster, key=self._rank, reverse=True):
                if not any(entity.overlaps(k) for k in kept):
                    kept.append(entity)
            if len(cluster) > len(kept):
                logger.debug(
                    f"Overlap at [{cluster[0].start}, {max(e.end for e in cluster)}): "
                    f"kept {[(e.type.value, e.original) for e in kept]}, dropped "
                    f"{[(e.type.value, e.original) for e in cluster if e not in kept]}"
                )
            winners.extend(sorted(kept, key=lambda e: e.start))
        return winners

    def resolve(
        self,
        raw_entities: Iterable[DetectedEntity],
        enabled_types: Iterable[EntityType | str] | None = None,
    ) -> list[DetectedEntity]:
        """Resolve overlaps over everything, then drop disabled types.

        ``enabled_types=None`` means every type is enabled.
        """
        raw = list(raw_entities)
        resolved = self.deduplicate(raw)
        if enabled_types is not None:
            enabled = {EntityType.parse(t) for t in enabled_types}
            resolved = [e for e in resolved if e.type in enabled]
        logger.debug(f"Resolved {len(raw)} candidates into {len(resolved)} entities")
        return resolved

"""ScrubSession — one pipeline and one mapper, scoped to a tab or document.

Usage:
    session = ScrubSession.create(config=PipelineConfig(seed=1))

    session.scrub_text("Call Jane Doe at 555-123-4567")
    session.scrub_text("Jane Doe again")     # same fake name as above

    saved = session.export_state()           # e.g. into browser storage
    ScrubSession.create().import_state(saved)

Calls against one session must not overlap; give each tab its own session.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Iterable

from .mapper import ConsistencyMapper
from .pipeline import Pipeline, PipelineConfig, RawEntities
from .types import EntityType, PipelineResult


@dataclass
class ScrubSession:
    """Pipeline plus the consistency state it writes to."""

    pipeline: Pipeline
    mapper: ConsistencyMapper

    @classmethod
    def create(cls, *, config: PipelineConfig | None = None) -> "ScrubSession":
        """Factory — creates a fresh session with its own mapper."""
        return cls(pipeline=Pipeline(config), mapper=ConsistencyMapper())

    def scrub(self, text: str) -> PipelineResult:
        """Detect and replace with the built-in detectors."""
        return self.pipeline.scrub(text, self.mapper)

    def scrub_text(self, text: str) -> str:
        """Scrub a single string (convenience)."""
        return self.scrub(text).apply()

    def process(
        self,
        text: str,
        raw_entities: RawEntities,
        enabled_types: Iterable[EntityType | str] | None = None,
    ) -> PipelineResult:
        """Replace candidates found by the host's own detectors."""
        return self.pipeline.run(text, raw_entities, self.mapper, enabled_types)

    def export_state(self) -> dict[str, list]:
        return self.mapper.export()

    def import_state(self, data: dict[str, Any]) -> int:
        """Load exported state; returns the number of records skipped."""
        return self.mapper.import_data(data)

    def reset(self) -> None:
        """Forget every mapping and draw new magnitude multipliers."""
        self.mapper.clear()
        self.pipeline.generator.reset_multipliers()

    @property
    def stats(self) -> dict:
        return {
            "mapper_size": self.mapper.size,
            "redaction_mode": self.pipeline.config.redaction_mode,
            "mappings": dict(self.mapper.export()["mappings"]),
        }

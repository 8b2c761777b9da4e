"""Pipeline — the main API.  Detect, arbitrate, link, replace.

Usage:
    from snapshield import ConsistencyMapper, Pipeline, PipelineConfig

    mapper = ConsistencyMapper()                     # one per tab/session
    pipeline = Pipeline(PipelineConfig(seed=42))     # reusable

    result = pipeline.scrub("Invoice for Acme Corp: $1,250.00", mapper)
    result.apply()        # e.g. "Invoice for Vertex Labs, LLC: $1,377.50"
    result.to_dicts()     # [{"start": 12, "end": 21, "original": ...}, ...]

Hosts with their own detectors call ``run`` with the raw candidates instead:

    result = pipeline.run(text, {EntityType.DATE: [...], EntityType.QUANTITY: [...]}, mapper)
"""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass, field
from typing import Callable, Iterable, Mapping, Union

from .deduplicator import Deduplicator
from .detectors import scan_regex
from .exceptions import ConfigurationError
from .generator import REDACTION_MODES, ReplacementGenerator
from .mapper import ConsistencyMapper, make_key
from .types import DetectedEntity, EntityType, PipelineResult, Substitution

logger = logging.getLogger(__name__)

RawEntities = Union[Mapping[EntityType, Iterable[DetectedEntity]], Iterable[DetectedEntity]]


def _parse_types(values: Iterable[EntityType | str]) -> set[EntityType]:
    types: set[EntityType] = set()
    for value in values:
        try:
            types.add(EntityType.parse(value))
        except (KeyError, ValueError):
            raise ConfigurationError(f"unknown entity type: {value!r}") from None
    return types


@dataclass
class PipelineConfig:
    """Configuration for the Pipeline."""
    enabled_types: set[EntityType] | None = None   # None = every type
    redaction_mode: str = "random"                 # "random" | "blackout"
    magnitude_variance: float = 30                 # percent, money & quantities
    date_variance_days: int = 60
    preserve_format: bool = True
    seed: int | None = None                        # fixed seed = reproducible output
    type_priorities: dict[EntityType, int] = field(default_factory=dict)
    use_presidio: bool = False                     # NER layer for names/places
    language: str = "en"
    score_threshold: float = 0.35                  # minimum confidence for Presidio
    presidio_entities: list[str] | None = None     # None = defaults
    custom_scanners: list[Callable[[str], list[DetectedEntity]]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.redaction_mode not in REDACTION_MODES:
            raise ConfigurationError(
                f"redaction_mode must be one of {REDACTION_MODES}, got {self.redaction_mode!r}"
            )
        if not 0 <= self.magnitude_variance <= 100:
            raise ConfigurationError(
                f"magnitude_variance must be between 0 and 100, got {self.magnitude_variance}"
            )
        if self.date_variance_days < 0:
            raise ConfigurationError(f"date_variance_days must be >= 0, got {self.date_variance_days}")
        if not 0 <= self.score_threshold <= 1:
            raise ConfigurationError(f"score_threshold must be between 0 and 1, got {self.score_threshold}")
        if self.enabled_types is not None:
            self.enabled_types = _parse_types(self.enabled_types)
        priorities: dict[EntityType, int] = {}
        for entity_type, priority in self.type_priorities.items():
            priorities.update(dict.fromkeys(_parse_types([entity_type]), int(priority)))
        self.type_priorities = priorities


class Pipeline:
    """Deduplicator -> auto-linking -> per-entity replacement.

    Owns the random source.  The mapper is passed in on every call so one
    pipeline can serve any number of independent sessions.
    """

    def __init__(
        self,
        config: PipelineConfig | None = None,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config or PipelineConfig()
        self.rng = rng or random.Random(self.config.seed)
        self.deduplicator = Deduplicator(self.config.type_priorities)
        self.generator = ReplacementGenerator(
            self.rng,
            mode=self.config.redaction_mode,
            variance_percent=self.config.magnitude_variance,
            date_variance_days=self.config.date_variance_days,
            preserve_format=self.config.preserve_format,
        )

    def detect(self, text: str) -> list[DetectedEntity]:
        """Raw candidates from every configured detector (overlaps included)."""
        candidates = scan_regex(text)

        if self.config.use_presidio:
            from .presidio_layer import scan_presidio
            candidates.extend(scan_presidio(
                text,
                language=self.config.language,
                entities=self.config.presidio_entities,
                score_threshold=self.config.score_threshold,
            ))

        for scanner in self.config.custom_scanners:
            candidates.extend(scanner(text))

        return candidates

    def run(
        self,
        text: str,
        raw_entities: RawEntities,
        mapper: ConsistencyMapper,
        enabled_types: Iterable[EntityType | str] | None = None,
    ) -> PipelineResult:
        """Resolve raw candidates for ``text`` into ordered substitutions.

        ``enabled_types`` overrides the configured set for this call.
        """
        if enabled_types is None:
            enabled_types = self.config.enabled_types

        candidates: list[DetectedEntity] = []
        for entity in _flatten(raw_entities):
            if entity.end > len(text):
                logger.warning(
                    f"Skipping {entity.type.value} span [{entity.start}, {entity.end}) "
                    f"outside text of length {len(text)}"
                )
                continue
            candidates.append(entity)

        entities = self.deduplicator.resolve(candidates, enabled_types)
        mapper.auto_link_related(entities)

        substitutions: list[Substitution] = []
        decided: dict[str, str | None] = {}
        for entity in entities:
            key = make_key(entity.type, entity.original)
            if key not in decided:
                decided[key] = self.generator.resolve(entity, mapper)
            substitutions.append(Substitution(entity=entity, replacement=decided[key]))

        logger.info(
            f"Pipeline run: {len(candidates)} candidates, {len(entities)} entities, "
            f"{len(decided)} distinct values"
        )
        return PipelineResult(text=text, substitutions=substitutions)

    def scrub(self, text: str, mapper: ConsistencyMapper) -> PipelineResult:
        """Detect with the built-in layers, then ``run``."""
        return self.run(text, self.detect(text), mapper)


def _flatten(raw_entities: RawEntities) -> list[DetectedEntity]:
    if isinstance(raw_entities, Mapping):
        return [e for entities in raw_entities.values() for e in entities]
    return list(raw_entities)


def run_pipeline(
    text: str,
    raw_entities: RawEntities,
    enabled_types: Iterable[EntityType | str] | None,
    mapper: ConsistencyMapper,
    mode: str = "random",
    variance: float = 30,
    seed: int | None = None,
) -> PipelineResult:
    """One-shot run with an ad-hoc pipeline."""
    config = PipelineConfig(redaction_mode=mode, magnitude_variance=variance, seed=seed)
    return Pipeline(config).run(text, raw_entities, mapper, enabled_types)

"""Core types."""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from .exceptions import InvalidEntityError


class EntityType(str, Enum):
    """PII categories.  Values are the wire names used in mapper keys."""
    DATE = "date"
    QUANTITY = "quantity"
    MONEY = "money"
    EMAIL = "email"
    PHONE = "phone"
    ADDRESS = "address"
    URL = "url"
    IP = "ip"
    PROPER_NOUN = "properNoun"
    LOCATION = "location"
    SSN = "ssn"
    CREDIT_CARD = "creditCard"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str | EntityType) -> EntityType:
        """Accept an EntityType, its wire value or its member name."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls[str(value).upper()]


@dataclass(frozen=True, slots=True)
class DetectedEntity:
    """A single candidate span produced by a detector."""
    type: EntityType
    original: str
    start: int             # half-open [start, end)
    end: int
    confidence: float = 1.0
    source: str = "external"   # "regex" | "presidio" | "external"

    def __post_init__(self) -> None:
        if self.start < 0 or self.end <= self.start:
            raise InvalidEntityError(
                f"invalid span [{self.start}, {self.end}) for {self.type}: {self.original!r}"
            )
        if not 0 <= self.confidence <= 1:
            raise InvalidEntityError(
                f"confidence must be between 0 and 1, got {self.confidence} for {self.original!r}"
            )

    @property
    def length(self) -> int:
        return self.end - self.start

    def overlaps(self, other: DetectedEntity) -> bool:
        return self.start < other.end and other.start < self.end


@dataclass(frozen=True, slots=True)
class Substitution:
    """One entity and the text that should replace it (None = leave as is)."""
    entity: DetectedEntity
    replacement: str | None

    @property
    def start(self) -> int:
        return self.entity.start

    @property
    def end(self) -> int:
        return self.entity.end

    @property
    def original(self) -> str:
        return self.entity.original

    def to_dict(self) -> dict:
        return {
            "start": self.start,
            "end": self.end,
            "type": self.entity.type.value,
            "original": self.original,
            "replacement": self.replacement,
        }


@dataclass(slots=True)
class PipelineResult:
    """Ordered substitutions for one input text."""
    text: str                                   # the source text
    substitutions: list[Substitution] = field(default_factory=list)

    def apply(self) -> str:
        """Splice replacements into the source (right-to-left to keep offsets)."""
        result = self.text
        for sub in reversed(self.substitutions):
            if sub.replacement is None:
                continue
            result = result[:sub.start] + sub.replacement + result[sub.end:]
        return result

    def to_dicts(self) -> list[dict]:
        return [s.to_dict() for s in self.substitutions]

    @property
    def entities(self) -> list[DetectedEntity]:
        return [s.entity for s in self.substitutions]

    def __len__(self) -> int:
        return len(self.substitutions)

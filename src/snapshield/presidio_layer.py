"""Presidio NER candidates for unstructured PII.

Catches person/organisation names and places that regex can't reliably
detect.  Uses spaCy under the hood; nothing is loaded until first use.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from .types import DetectedEntity, EntityType

if TYPE_CHECKING:
    from presidio_analyzer import AnalyzerEngine

# Lazy singleton: don't load spaCy until first use
_engine: AnalyzerEngine | None = None
_engine_lang: str = ""


def _get_engine(language: str = "en") -> AnalyzerEngine:
    """Lazy-init the Presidio analyzer engine."""
    global _engine, _engine_lang
    if _engine is None or _engine_lang != language:
        from presidio_analyzer import AnalyzerEngine
        from presidio_analyzer.nlp_engine import NlpEngineProvider

        provider = NlpEngineProvider(nlp_configuration={
            "nlp_engine_name": "spacy",
            "models": [{"lang_code": language, "model_name": f"{language}_core_web_sm"}],
        })
        nlp_engine = provider.create_engine()
        _engine = AnalyzerEngine(nlp_engine=nlp_engine, supported_languages=[language])
        _engine_lang = language
    return _engine


# Presidio label -> our type.  Structured labels are left to the regex layer.
LABEL_MAP: dict[str, EntityType] = {
    "PERSON": EntityType.PROPER_NOUN,
    "ORGANIZATION": EntityType.PROPER_NOUN,
    "ORG": EntityType.PROPER_NOUN,
    "LOCATION": EntityType.LOCATION,
    "GPE": EntityType.LOCATION,
}

DEFAULT_ENTITIES = ["PERSON", "ORGANIZATION", "LOCATION"]


def scan_presidio(
    text: str,
    *,
    language: str = "en",
    entities: list[str] | None = None,
    score_threshold: float = 0.35,
) -> list[DetectedEntity]:
    """Run Presidio analysis on text.

    Args:
        text: Input text to scan.
        language: ISO language code.
        entities: Presidio entity labels to request (None = DEFAULT_ENTITIES).
        score_threshold: Minimum confidence score.
    """
    if not text.strip():
        return []
    engine = _get_engine(language)
    results = engine.analyze(
        text=text,
        language=language,
        entities=entities or DEFAULT_ENTITIES,
        score_threshold=score_threshold,
    )

    matches: list[DetectedEntity] = []
    for r in results:
        entity_type = LABEL_MAP.get(r.entity_type)
        if entity_type is None or r.end <= r.start:
            continue
        matches.append(DetectedEntity(
            type=entity_type,
            original=text[r.start:r.end],
            start=r.start,
            end=r.end,
            confidence=float(r.score),
            source="presidio",
        ))

    return sorted(matches, key=lambda m: m.start)

"""Tests for the end-to-end pipeline: dedup, linking, replacement, splicing."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from types import SimpleNamespace

import pytest

from snapshield import (
    ConfigurationError,
    ConsistencyMapper,
    DetectedEntity,
    EntityType,
    Pipeline,
    PipelineConfig,
    PipelineResult,
    Substitution,
    run_pipeline,
)
from snapshield import presidio_layer
from snapshield.kinds import domain_token, host_of, pseudonym_local


def span(text, entity_type, needle, occurrence=0):
    start = -1
    for _ in range(occurrence + 1):
        start = text.index(needle, start + 1)
    return DetectedEntity(EntityType.parse(entity_type), needle, start, start + len(needle))


# ── Config ───────────────────────────────────────────────────────────

def test_config_defaults():
    config = PipelineConfig()
    assert config.redaction_mode == "random"
    assert config.magnitude_variance == 30
    assert config.enabled_types is None


def test_config_normalizes_types():
    config = PipelineConfig(enabled_types={"email", "PROPER_NOUN"}, type_priorities={"date": 95})
    assert config.enabled_types == {EntityType.EMAIL, EntityType.PROPER_NOUN}
    assert config.type_priorities == {EntityType.DATE: 95}


@pytest.mark.parametrize("kwargs", [
    {"redaction_mode": "shred"},
    {"magnitude_variance": -1},
    {"magnitude_variance": 101},
    {"date_variance_days": -5},
    {"score_threshold": 2},
    {"enabled_types": {"passport"}},
])
def test_config_rejects_bad_values(kwargs):
    with pytest.raises(ConfigurationError):
        PipelineConfig(**kwargs)


# ── Results ──────────────────────────────────────────────────────────

def test_apply_splices_right_to_left():
    text = "Pay $100.00 to Jane now"
    result = PipelineResult(text, [
        Substitution(span(text, "money", "$100.00"), "$1,234.56"),
        Substitution(span(text, "properNoun", "Jane"), None),
    ])
    assert result.apply() == "Pay $1,234.56 to Jane now"
    assert result.to_dicts()[0] == {
        "start": 4, "end": 11, "type": "money", "original": "$100.00", "replacement": "$1,234.56",
    }
    assert len(result) == 2


# ── Run ──────────────────────────────────────────────────────────────

def test_run_keeps_text_outside_spans():
    text = "Invoice from TechFlow Inc: 250 kg, call 555-123-4567."
    raw = {
        EntityType.PROPER_NOUN: [span(text, "properNoun", "TechFlow Inc")],
        EntityType.QUANTITY: [span(text, "quantity", "250 kg")],
        EntityType.PHONE: [span(text, "phone", "555-123-4567")],
    }
    result = Pipeline(PipelineConfig(seed=1)).run(text, raw, ConsistencyMapper())
    out = result.apply()

    assert [s.entity.type for s in result.substitutions] == [
        EntityType.PROPER_NOUN, EntityType.QUANTITY, EntityType.PHONE,
    ]
    assert out.startswith("Invoice from ")
    assert ": " in out and " kg, call " in out
    assert out.endswith(".")
    assert "TechFlow" not in out
    assert "555-123-4567" not in out


def test_same_value_twice_in_one_run_is_identical():
    text = "Jane met JANE and jane"
    raw = [
        span(text, "properNoun", "Jane"),
        span(text, "properNoun", "JANE"),
        span(text, "properNoun", "jane"),
    ]
    result = Pipeline(PipelineConfig(seed=2)).run(text, raw, ConsistencyMapper())
    assert len({s.replacement for s in result.substitutions}) == 1


def test_consistency_across_runs():
    pipeline = Pipeline(PipelineConfig(seed=3))
    mapper = ConsistencyMapper()
    first = pipeline.run("a@b.com", [span("a@b.com", "email", "a@b.com")], mapper)
    second = pipeline.run("x A@B.com", [span("x A@B.com", "email", "A@B.com")], mapper)
    assert first.substitutions[0].replacement == second.substitutions[0].replacement


def test_disabled_winner_leaves_span_alone():
    text = "Jan 17, 2026"
    raw = {
        EntityType.DATE: [DetectedEntity(EntityType.DATE, text, 0, 12)],
        EntityType.QUANTITY: [DetectedEntity(EntityType.QUANTITY, "17", 4, 6)],
    }
    result = Pipeline().run(text, raw, ConsistencyMapper(), enabled_types=["quantity"])
    assert result.substitutions == []
    assert result.apply() == text


def test_out_of_range_spans_skipped():
    text = "short"
    raw = [DetectedEntity(EntityType.QUANTITY, "12", 10, 12)]
    assert Pipeline().run(text, raw, ConsistencyMapper()).substitutions == []


def test_linked_company_and_email_are_coherent():
    text = "TechFlow Inc (sales@techflow.com)"
    raw = [span(text, "properNoun", "TechFlow Inc"), span(text, "email", "sales@techflow.com")]
    mapper = ConsistencyMapper()
    result = Pipeline(PipelineConfig(seed=4)).run(text, raw, mapper)

    company, email = (s.replacement for s in result.substitutions)
    assert email == f"{pseudonym_local('sales@techflow.com')}@{domain_token(company)}.com"
    assert mapper.get_related("email", "sales@techflow.com") == ["properNoun:techflow inc"]


def test_company_first_replaces_whole_email():
    text = "TechFlow Inc: john.doe@techflow.com"
    raw = [span(text, "properNoun", "TechFlow Inc"), span(text, "email", "john.doe@techflow.com")]
    result = Pipeline(PipelineConfig(seed=9)).run(text, raw, ConsistencyMapper())
    out = result.apply()

    company, email = (s.replacement for s in result.substitutions)
    assert email.endswith(f"@{domain_token(company)}.com")
    assert "john.doe" not in out
    assert "techflow" not in out.lower()


def test_url_first_replaces_whole_email():
    text = "https://techflow.com jane.smith@techflow.com"
    raw = [span(text, "url", "https://techflow.com"), span(text, "email", "jane.smith@techflow.com")]
    result = Pipeline(PipelineConfig(seed=10)).run(text, raw, ConsistencyMapper())
    out = result.apply()

    url, email = (s.replacement for s in result.substitutions)
    assert email.endswith(f"@{host_of(url)}")
    assert "jane.smith" not in out
    assert "techflow" not in out.lower()


def test_far_future_date_does_not_abort_run():
    text = "Expires 9999-12-31, renew by 2026-01-17"
    result = Pipeline(PipelineConfig(seed=11)).scrub(text, ConsistencyMapper())
    assert [s.entity.type for s in result.substitutions] == [EntityType.DATE, EntityType.DATE]
    assert result.substitutions[0].replacement.startswith("9999-")


def test_stored_none_leaves_span_unreplaced():
    text = "Budget $5"
    mapper = ConsistencyMapper()
    mapper.set("money", "$5", None)
    result = Pipeline().run(text, [span(text, "money", "$5")], mapper)
    assert result.substitutions[0].replacement is None
    assert result.apply() == text


def test_blackout_mode():
    text = "Call Jane Doe"
    result = run_pipeline(
        text, [span(text, "properNoun", "Jane Doe")], None, ConsistencyMapper(), mode="blackout",
    )
    assert result.apply() == "Call ████ ███"


def test_seeded_runs_are_reproducible():
    text = "Jane Doe paid $1,250.00 on 2026-01-17"
    raw = [span(text, "properNoun", "Jane Doe"), span(text, "money", "$1,250.00")]
    a = run_pipeline(text, raw, None, ConsistencyMapper(), seed=7).apply()
    b = run_pipeline(text, raw, None, ConsistencyMapper(), seed=7).apply()
    assert a == b


# ── Detection ────────────────────────────────────────────────────────

def test_scrub_uses_regex_layer():
    text = "Email jane.doe@example.org today"
    result = Pipeline(PipelineConfig(seed=5)).scrub(text, ConsistencyMapper())
    assert [d["type"] for d in result.to_dicts()] == ["email"]
    assert "jane.doe@example.org" not in result.apply()


def test_scrub_date_wins_over_number():
    text = "Signed Jan 17, 2026."
    result = Pipeline(PipelineConfig(seed=6)).scrub(text, ConsistencyMapper())
    assert [s.entity.type for s in result.substitutions] == [EntityType.DATE]


def test_custom_scanner_and_presidio(monkeypatch):
    engine = SimpleNamespace(analyze=lambda **kw: [
        SimpleNamespace(entity_type="PERSON", start=0, end=8, score=0.9),
    ])
    monkeypatch.setattr(presidio_layer, "_get_engine", lambda language="en": engine)

    def scanner(text):
        start = text.index("Lisbon")
        return [DetectedEntity(EntityType.LOCATION, "Lisbon", start, start + 6, source="custom")]

    config = PipelineConfig(seed=8, use_presidio=True, custom_scanners=[scanner])
    result = Pipeline(config).scrub("Jane Doe lives in Lisbon", ConsistencyMapper())
    assert [s.entity.type for s in result.substitutions] == [EntityType.PROPER_NOUN, EntityType.LOCATION]
    assert "Jane Doe" not in result.apply()

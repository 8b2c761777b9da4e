"""YAML/dict config loader for snapshield.

Supports loading from a YAML file or a plain dict (for embedding in a
larger host config).

Example YAML:

    snapshield:
      enabled: true
      redaction_mode: random       # "random" or "blackout"
      magnitude_variance: 30       # percent
      date_variance_days: 60
      preserve_format: true
      seed: 1234                   # omit for unseeded output
      enabled_types:
        - properNoun
        - money
        - quantity
        - email
      type_priorities:
        date: 95
      use_presidio: false
      language: en
      score_threshold: 0.35
"""

from __future__ import annotations
from pathlib import Path
from typing import Any

from .exceptions import ConfigurationError
from .pipeline import PipelineConfig
from .session import ScrubSession
from .types import PipelineResult

_FIELDS = (
    "enabled_types",
    "redaction_mode",
    "magnitude_variance",
    "date_variance_days",
    "preserve_format",
    "seed",
    "type_priorities",
    "use_presidio",
    "language",
    "score_threshold",
    "presidio_entities",
)


class _NoopSession:
    """Pass-through session when scrubbing is disabled."""
    def scrub(self, text: str) -> PipelineResult:
        return PipelineResult(text=text)
    def scrub_text(self, text: str) -> str:
        return text
    def export_state(self) -> dict[str, list]:
        return {"mappings": [], "relations": [], "derivations": []}
    def reset(self) -> None:
        pass
    @property
    def stats(self) -> dict:
        return {"mapper_size": 0, "mappings": {}}


def load_config(data: dict[str, Any]) -> PipelineConfig:
    """Build a PipelineConfig from a dict (from YAML or inline)."""
    # Support nested under "snapshield" key or flat
    if "snapshield" in data:
        data = data["snapshield"] or {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"config must be a mapping, got {type(data).__name__}")

    kwargs = {name: data[name] for name in _FIELDS if name in data}
    if kwargs.get("enabled_types") is not None:
        kwargs["enabled_types"] = set(kwargs["enabled_types"])
    if kwargs.get("type_priorities") is None:
        kwargs.pop("type_priorities", None)

    try:
        return PipelineConfig(**kwargs)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"invalid config: {e}") from e


def is_enabled(data: dict[str, Any]) -> bool:
    if "snapshield" in data:
        data = data["snapshield"] or {}
    return bool(data.get("enabled", True))


def load_from_yaml(path: str | Path) -> dict[str, Any]:
    """Read a raw config dict from a YAML file."""
    import yaml  # optional dependency
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path}: top level must be a mapping")
    return data


def create_session(config: dict[str, Any] | PipelineConfig | None = None) -> ScrubSession | _NoopSession:
    """Create a fully configured session from a config dict or object."""
    if config is None or isinstance(config, PipelineConfig):
        return ScrubSession.create(config=config)

    if not is_enabled(config):
        # Return a pass-through session (no scrubbing)
        return _NoopSession()

    return ScrubSession.create(config=load_config(config))

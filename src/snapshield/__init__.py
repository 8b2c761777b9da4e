"""snapshield — consistent, format-preserving PII replacement for page text."""

from .types import DetectedEntity, EntityType, PipelineResult, Substitution
from .deduplicator import Deduplicator
from .mapper import ConsistencyMapper
from .pools import CompanyPool, LocationPool, NamePool
from .generator import ReplacementGenerator
from .pipeline import Pipeline, PipelineConfig, run_pipeline
from .session import ScrubSession
from .config import create_session, load_config, load_from_yaml
from .exceptions import (
    ConfigurationError,
    InvalidEntityError,
    PoolExhaustedError,
    SnapShieldError,
)

__all__ = [
    "DetectedEntity", "EntityType", "PipelineResult", "Substitution",
    "Deduplicator",
    "ConsistencyMapper",
    "CompanyPool", "LocationPool", "NamePool",
    "ReplacementGenerator",
    "Pipeline", "PipelineConfig", "run_pipeline",
    "ScrubSession",
    "create_session", "load_config", "load_from_yaml",
    "ConfigurationError", "InvalidEntityError", "PoolExhaustedError", "SnapShieldError",
]
__version__ = "0.1.0"

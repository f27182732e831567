"""
Domain Layer - Static Field Declarations

Defines field rules, validation results, the dependency graph checks and
the registry that bundles them into one immutable spec.
"""

from paramflow.domain.graph import detect_requires_cycles
from paramflow.domain.models import (
    FieldCheckContext,
    FieldRule,
    OptionChoice,
    ValidationErr,
    ValidationOk,
    ValidationResult,
    ValidationSkip,
)
from paramflow.domain.registry import FieldSpecRegistry, SpecBuilder

__all__ = [
    "detect_requires_cycles",
    "FieldCheckContext",
    "FieldRule",
    "FieldSpecRegistry",
    "OptionChoice",
    "SpecBuilder",
    "ValidationErr",
    "ValidationOk",
    "ValidationResult",
    "ValidationSkip",
]

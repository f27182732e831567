"""
State Layer - Runtime Data Models

Defines the per-field runtime state used by the elicitation engine.
"""

from paramflow.state.models import (
    AvailableOptions,
    ElicitationSession,
    EmptyState,
    Parameter,
    ParameterOptions,
    ParameterState,
    ProvidedState,
    SpecifiedState,
    UnknownOptions,
)

__all__ = [
    "AvailableOptions",
    "ElicitationSession",
    "EmptyState",
    "Parameter",
    "ParameterOptions",
    "ParameterState",
    "ProvidedState",
    "SpecifiedState",
    "UnknownOptions",
]

"""
Schemas - Structured Output Models

Defines Pydantic models for batch validation outcomes and for the
structured LLM outputs used by the question writer and the specifier.
"""

from paramflow.schemas.decisions import OptionSelection, ParameterQuestion
from paramflow.schemas.feedback import (
    FieldFeedback,
    FixupAccepted,
    FixupOutcome,
    FixupRejected,
)

__all__ = [
    "FieldFeedback",
    "FixupAccepted",
    "FixupOutcome",
    "FixupRejected",
    "OptionSelection",
    "ParameterQuestion",
]

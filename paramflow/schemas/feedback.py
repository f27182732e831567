"""
Schemas - Batch Validation Outcomes

This module defines the Pydantic models returned by the fixup compiler.
They serialize with camelCase aliases so a tool-call adapter can hand
`outcome.model_dump(by_alias=True, exclude_none=True)` straight back to
the agent that made the call.
"""

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_FEEDBACK_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FieldFeedback(BaseModel):
    """
    Verdict for one field after a fixup pass.

    A rejected field carries either a refusal_reason or needs_valid_fields
    (the required fields that must become valid first), or neither when the
    value was simply absent and allowed_options are offered as guidance.
    """
    model_config = _FEEDBACK_CONFIG

    valid: bool
    allowed_options: Optional[List[Any]] = Field(
        None,
        description="Values the field may take given its current dependencies.",
    )
    refusal_reason: Optional[str] = Field(
        None,
        description="Why the provided value was refused.",
    )
    needs_valid_fields: Optional[List[str]] = Field(
        None,
        description="Required fields that must hold valid values before this one is checked.",
    )


class FixupAccepted(BaseModel):
    model_config = _FEEDBACK_CONFIG

    tag: Literal["accepted"] = "accepted"
    value: Dict[str, Any]


class FixupRejected(BaseModel):
    model_config = _FEEDBACK_CONFIG

    tag: Literal["rejected"] = "rejected"
    validation_results: Dict[str, FieldFeedback]

    @property
    def invalid_fields(self) -> List[str]:
        return [name for name, feedback in self.validation_results.items() if not feedback.valid]


FixupOutcome = Annotated[Union[FixupAccepted, FixupRejected], Field(discriminator="tag")]

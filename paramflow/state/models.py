"""
State Layer - Runtime Data Models

This module defines the runtime state of an elicitation session: for every
field, how far its value has been resolved (ParameterState) and which
candidate options are known for it (ParameterOptions). The session is
created once per elicitation and mutated in place, one field at a time.
"""

from typing import Annotated, Any, Dict, List, Literal, Union

from pydantic import BaseModel, Field

from ..domain.models import OptionChoice


# ==============================================================================
# Parameter State: empty -> provided(raw text) -> specified(value)
# ==============================================================================

class EmptyState(BaseModel):
    """Nothing is known about the field yet."""
    tag: Literal["empty"] = "empty"


class ProvidedState(BaseModel):
    """Free text was given for the field but not yet matched to an option."""
    tag: Literal["provided"] = "provided"
    value: str


class SpecifiedState(BaseModel):
    """The field holds a confirmed domain value."""
    tag: Literal["specified"] = "specified"
    value: Any


ParameterState = Annotated[
    Union[EmptyState, ProvidedState, SpecifiedState],
    Field(discriminator="tag"),
]


# ==============================================================================
# Parameter Options: unknown | available(variants)
# ==============================================================================

class UnknownOptions(BaseModel):
    tag: Literal["unknown"] = "unknown"


class AvailableOptions(BaseModel):
    tag: Literal["available"] = "available"
    variants: List[OptionChoice] = Field(default_factory=list)


ParameterOptions = Annotated[
    Union[UnknownOptions, AvailableOptions],
    Field(discriminator="tag"),
]


class Parameter(BaseModel):
    """
    Runtime slot for a single field.
    """
    state: ParameterState = Field(default_factory=EmptyState)
    options: ParameterOptions = Field(default_factory=UnknownOptions)

    @property
    def is_specified(self) -> bool:
        return isinstance(self.state, SpecifiedState)


class ElicitationSession(BaseModel):
    """
    The state of one elicitation: a Parameter per declared field.
    """
    parameters: Dict[str, Parameter] = Field(default_factory=dict)

    def __getitem__(self, name: str) -> Parameter:
        return self.parameters[name]

    @property
    def all_specified(self) -> bool:
        return all(param.is_specified for param in self.parameters.values())

    @property
    def pending(self) -> List[str]:
        return [name for name, param in self.parameters.items() if not param.is_specified]

    def values(self) -> Dict[str, Any]:
        """Returns the specified values, keyed by field name."""
        return {
            name: param.state.value
            for name, param in self.parameters.items()
            if isinstance(param.state, SpecifiedState)
        }

"""
Flow Step Types - Elicitation State Machine Actions

Type definitions for the actions the elicitation engine can take next.
Produced by the pure step function and consumed by the engine's run loop.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional

from ...domain.models import OptionChoice


class FlowStepType(Enum):
    """
    What the engine must do next, for a single field.
    """

    DONE = auto()  # Every field is specified.
    REFUSE_EMPTY_OPTIONS = auto()  # Provided text, but the field has no options at all.
    NEED_SPECIFY = auto()  # Provided text must be resolved against known options.
    NEED_FETCH_FOR_UPDATE = auto()  # Provided text, options not fetched yet.
    NEED_FETCH_FOR_ASK = auto()  # Empty field whose requirements are met.


@dataclass
class FlowStep:
    """
    A single action proposed by the step function.

    Attributes:
        type: The FlowStepType.
        key: The field the action applies to (None for DONE).
        filters: Dependency values to fetch options with (fetch steps).
        user_value: Raw text to resolve (NEED_SPECIFY, REFUSE_EMPTY_OPTIONS).
        options: Candidates to resolve against (NEED_SPECIFY).
        values: The resolved domain value (DONE).
    """

    type: FlowStepType
    key: Optional[str] = None
    filters: Dict[str, Any] = field(default_factory=dict)
    user_value: Optional[str] = None
    options: List[OptionChoice] = field(default_factory=list)
    values: Dict[str, Any] = field(default_factory=dict)

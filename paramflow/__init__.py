"""
Paramflow

Dependency-aware parameter resolution for LLM agents. One declarative field
spec drives two engines: a one-shot fixup compiler that validates a partial
tool call and returns per-field feedback, and an interactive elicitation
engine that asks for missing values field by field.
"""

from paramflow.domain import (
    FieldCheckContext,
    FieldRule,
    FieldSpecRegistry,
    OptionChoice,
    SpecBuilder,
    ValidationErr,
    ValidationOk,
    ValidationResult,
    ValidationSkip,
)
from paramflow.state import (
    AvailableOptions,
    ElicitationSession,
    EmptyState,
    Parameter,
    ProvidedState,
    SpecifiedState,
    UnknownOptions,
)
from paramflow.schemas import FieldFeedback, FixupAccepted, FixupOutcome, FixupRejected
from paramflow.services import (
    Asker,
    CallbackAsker,
    ExactMatchSpecifier,
    QuestionWriter,
    Specifier,
    TemplateQuestionWriter,
)
from paramflow.execution import (
    ElicitationEngine,
    FixupCompiler,
    FlowStep,
    FlowStepType,
    compile_fixup,
    init_params,
    next_flow_step,
)
from paramflow.agent import AgentBase, flow
from paramflow.exceptions import (
    EmptyOptionsRefusal,
    EngineStuck,
    ParamflowError,
    SpecCycleError,
    SpecDefinitionError,
    SpecificationError,
)

__all__ = [
    # Domain Layer
    "FieldCheckContext",
    "FieldRule",
    "FieldSpecRegistry",
    "OptionChoice",
    "SpecBuilder",
    "ValidationErr",
    "ValidationOk",
    "ValidationResult",
    "ValidationSkip",
    # State Layer
    "AvailableOptions",
    "ElicitationSession",
    "EmptyState",
    "Parameter",
    "ProvidedState",
    "SpecifiedState",
    "UnknownOptions",
    # Schemas
    "FieldFeedback",
    "FixupAccepted",
    "FixupOutcome",
    "FixupRejected",
    # Services
    "Asker",
    "CallbackAsker",
    "ExactMatchSpecifier",
    "QuestionWriter",
    "Specifier",
    "TemplateQuestionWriter",
    # Execution Layer
    "ElicitationEngine",
    "FixupCompiler",
    "FlowStep",
    "FlowStepType",
    "compile_fixup",
    "init_params",
    "next_flow_step",
    # Agents
    "AgentBase",
    "flow",
    # Errors
    "EmptyOptionsRefusal",
    "EngineStuck",
    "ParamflowError",
    "SpecCycleError",
    "SpecDefinitionError",
    "SpecificationError",
]

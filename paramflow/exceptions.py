"""
Paramflow Exceptions

Errors raised while defining a field spec or while resolving parameters.
Batch validation never raises for bad input: it returns structured feedback.
"""

from typing import List, Sequence


class ParamflowError(Exception):
    """Base class for every error raised by paramflow."""
    pass


class SpecDefinitionError(ParamflowError):
    """Raised when a field spec is malformed at construction time."""
    pass


class UnknownFieldError(SpecDefinitionError):
    """Raised when a rule depends on a field that was never declared."""

    def __init__(self, field: str, unknown: Sequence[str]):
        self.field = field
        self.unknown = list(unknown)
        super().__init__(
            f"Field '{field}' depends on undeclared field(s): {', '.join(self.unknown)}"
        )


class SelfReferenceError(SpecDefinitionError):
    """Raised when a rule lists its own field in requires or influenced_by."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Field '{field}' cannot depend on itself")


class IncompleteSpecError(SpecDefinitionError):
    """Raised when a builder is finalized before every field has a rule."""

    def __init__(self, missing: Sequence[str]):
        self.missing = list(missing)
        super().__init__(f"Missing rules for field(s): {', '.join(self.missing)}")


class SpecCycleError(SpecDefinitionError):
    """Raised when the requires graph contains one or more cycles."""

    def __init__(self, cycles: List[List[str]]):
        self.cycles = cycles
        joined = "; ".join(" -> ".join(cycle) for cycle in cycles)
        super().__init__(f"Cycle detected in requires graph: {joined}")


class EmptyOptionsRefusal(ParamflowError):
    """
    Raised when a provided value has no candidate options at all.

    Nothing the user can say will resolve the field, so the session ends.
    """

    def __init__(self, field: str, raw_value: str | None = None):
        self.field = field
        self.raw_value = raw_value
        super().__init__(f"No options available for field '{field}'")


class EngineStuck(ParamflowError):
    """Raised when no field can make progress although some are unresolved."""

    def __init__(self, pending: Sequence[str]):
        self.pending = list(pending)
        super().__init__(
            f"Elicitation cannot progress; unresolved field(s): {', '.join(self.pending)}"
        )


class SpecificationError(ParamflowError):
    """Raised when a Specifier cannot map free text onto a candidate option."""
    pass


class ConfigurationError(ParamflowError):
    """Raised when a collaborator is requested but its settings are missing."""
    pass

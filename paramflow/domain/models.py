"""
Domain Layer - Static Field Declarations

This module defines the static description of a domain object: which fields
exist, what each field depends on, and how candidate values for a field are
computed and checked. These dataclasses are built once per spec and never
mutated by the engines.
"""

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Literal, Mapping, Optional, Tuple, Union

from ..exceptions import SpecDefinitionError


@dataclass(frozen=True)
class OptionChoice:
    """
    Candidate value for a field.

    Attributes:
        id: Stable identifier used to resolve free-text input onto this option.
        value: The domain value stored once the option is chosen.
    """
    id: str
    value: Any

    @classmethod
    def of(cls, value: Any) -> "OptionChoice":
        """Builds an option whose id is the string form of its value."""
        return cls(id=str(value), value=value)


@dataclass(frozen=True)
class ValidationSkip:
    """Value absent: nothing to validate yet, options shown for guidance."""
    allowed_options: Optional[List[Any]] = None
    tag: Literal["skip"] = "skip"


@dataclass(frozen=True)
class ValidationOk:
    """
    Value accepted.

    When normalized_value is omitted the validated value is stored as is.
    """
    normalized_value: Any = None
    allowed_options: Optional[List[Any]] = None
    tag: Literal["ok"] = "ok"


@dataclass(frozen=True)
class ValidationErr:
    """Value refused, with a human-readable reason."""
    refusal_reason: str
    allowed_options: Optional[List[Any]] = None
    tag: Literal["err"] = "err"


ValidationResult = Union[ValidationSkip, ValidationOk, ValidationErr]


@dataclass(frozen=True)
class FieldCheckContext:
    """
    Context handed to the supplementary check of an options-based rule.

    Attributes:
        options_for_field: Candidates fetched for the field in this pass.
        whole_input: The caller's raw partial input, read-only.
    """
    options_for_field: List[OptionChoice]
    whole_input: Mapping[str, Any]


def same_value(left: Any, right: Any) -> bool:
    """Strict equality: same type and equal. No coercion, no case-folding."""
    return type(left) is type(right) and left == right


async def resolve(result: Any) -> Any:
    """Awaits the result of a collaborator call when it is awaitable."""
    if inspect.isawaitable(result):
        return await result
    return result


@dataclass(frozen=True)
class FieldRule:
    """
    Declaration of a single field.

    A rule comes in one of two forms:

    (a) validator form: `validate(value | None, context) -> ValidationResult`
        decides everything, including which options are allowed.
    (b) options form: `fetch_options(context) -> List[OptionChoice]` computes
        the candidates, an optional `normalize(raw) -> value | None` cleans
        raw input, and an optional `validate(value, FieldCheckContext)`
        returns a refusal reason (or None) for values that are candidates.

    A rule with `fetch_options` is in options form. Callbacks may be plain
    functions or coroutines, and may perform I/O, but must not depend on
    engine state.

    Attributes:
        requires: Fields that must hold valid values before this one is evaluated.
        influenced_by: Fields whose valid values narrow this field's context.
        description: Human-readable description, used when asking for a value.
        validate: Validator (form a) or supplementary check (form b).
        fetch_options: Option fetcher; selects form b.
        normalize: Raw input cleaner. Returning None, or raising ValueError or
            TypeError, marks the value absent.
    """
    requires: Tuple[str, ...] = ()
    influenced_by: Tuple[str, ...] = ()
    description: str = ""
    validate: Optional[Callable[..., Any]] = None
    fetch_options: Optional[Callable[..., Any]] = None
    normalize: Optional[Callable[[Any], Any]] = None

    def __post_init__(self):
        object.__setattr__(self, "requires", tuple(self.requires))
        object.__setattr__(self, "influenced_by", tuple(self.influenced_by))
        if self.fetch_options is None and self.validate is None:
            raise SpecDefinitionError("A field rule needs either fetch_options or validate")

    @property
    def uses_options(self) -> bool:
        return self.fetch_options is not None

    @property
    def dependencies(self) -> Tuple[str, ...]:
        return self.requires + self.influenced_by

    def normalize_value(self, raw: Any) -> Any:
        if self.normalize is None:
            return raw
        return self.normalize(raw)

    async def options_for(self, context: Dict[str, Any]) -> List[OptionChoice]:
        """
        Computes the candidates for this field given its dependency context.

        Validator-form rules are asked with an absent value and their
        allowed_options are wrapped as choices keyed by their string form.
        """
        if self.fetch_options is not None:
            return list(await resolve(self.fetch_options(context)))

        result = await resolve(self.validate(None, context))
        return [OptionChoice.of(value) for value in (result.allowed_options or [])]


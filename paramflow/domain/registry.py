"""
Field Spec Registry

Holds the immutable, validated set of FieldRules for one domain object.
Construction cross-references every dependency name, rejects self references,
and refuses cyclic requires graphs, so the engines can rely on a well-formed
spec for their whole lifetime.
"""

import logging
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Type

from pydantic import BaseModel

from ..exceptions import (
    IncompleteSpecError,
    SelfReferenceError,
    SpecCycleError,
    SpecDefinitionError,
    UnknownFieldError,
)
from .graph import detect_requires_cycles
from .models import FieldRule

logger = logging.getLogger(__name__)


class FieldSpecRegistry(Mapping[str, FieldRule]):
    """
    Read-only mapping of field name -> FieldRule, in declaration order.

    Declaration order is the canonical scan order for both the fixup compiler
    and the elicitation engine.
    """

    def __init__(self, rules: Mapping[str, FieldRule]):
        self._rules: Mapping[str, FieldRule] = MappingProxyType(dict(rules))
        check_spec(self._rules)
        logger.debug(f"Registered field spec with fields: {list(self._rules)}")

    def __getitem__(self, name: str) -> FieldRule:
        return self._rules[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"FieldSpecRegistry({list(self._rules)})"

    @property
    def field_names(self) -> List[str]:
        return list(self._rules)


def check_spec(rules: Mapping[str, FieldRule]) -> None:
    """
    Validates the dependency declarations of a spec.

    Raises:
        UnknownFieldError: a dependency names an undeclared field.
        SelfReferenceError: a field depends on itself.
        SpecCycleError: the requires graph has cycles (all of them are listed).
    """
    declared = set(rules)
    for name, rule in rules.items():
        unknown = [dep for dep in rule.dependencies if dep not in declared]
        if unknown:
            raise UnknownFieldError(name, unknown)
        if name in rule.dependencies:
            raise SelfReferenceError(name)

    cycles = detect_requires_cycles({name: rule.requires for name, rule in rules.items()})
    if cycles:
        raise SpecCycleError(cycles)


def ensure_acyclic(spec: Mapping[str, FieldRule]) -> None:
    """Re-runs cycle detection on a spec about to be compiled."""
    cycles = detect_requires_cycles({name: rule.requires for name, rule in spec.items()})
    if cycles:
        raise SpecCycleError(cycles)


class SpecBuilder:
    """
    Collects one rule per declared field before producing a registry.

    Usage:
        spec = (
            SpecBuilder(["departure", "arrival"])
            .field("departure", fetch_options=list_departures)
            .field("arrival", requires=["departure"], fetch_options=list_arrivals)
            .build()
        )

    build() fails until every declared field has been given a rule.
    """

    def __init__(self, field_names: Iterable[str]):
        self._field_names: List[str] = list(field_names)
        if len(set(self._field_names)) != len(self._field_names):
            raise SpecDefinitionError("Field names must be unique")
        self._rules: Dict[str, FieldRule] = {}

    @classmethod
    def for_model(cls, model: Type[BaseModel]) -> "SpecBuilder":
        """Declares one field per attribute of a pydantic model."""
        return cls(model.model_fields.keys())

    def field(self, name: str, rule: Optional[FieldRule] = None, **rule_kwargs: Any) -> "SpecBuilder":
        if name not in self._field_names:
            raise SpecDefinitionError(f"Field '{name}' is not declared")
        if name in self._rules:
            raise SpecDefinitionError(f"Field '{name}' already has a rule")
        self._rules[name] = rule if rule is not None else FieldRule(**rule_kwargs)
        return self

    @property
    def missing(self) -> List[str]:
        return [name for name in self._field_names if name not in self._rules]

    def build(self) -> FieldSpecRegistry:
        if self.missing:
            raise IncompleteSpecError(self.missing)
        # Registry order follows the declared field order, not the order rules were added.
        return FieldSpecRegistry({name: self._rules[name] for name in self._field_names})

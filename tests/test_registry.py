import asyncio

import pytest

from paramflow.data.airline import AirlineBooking
from paramflow.domain.models import FieldRule, OptionChoice
from paramflow.domain.registry import FieldSpecRegistry, SpecBuilder
from paramflow.exceptions import (
    IncompleteSpecError,
    SelfReferenceError,
    SpecCycleError,
    SpecDefinitionError,
    UnknownFieldError,
)


def fetch_nothing(context):
    return []


def test_registry_keeps_declaration_order(flow_spec):
    assert flow_spec.field_names == ["departure", "arrival", "date", "passengers"]
    assert list(flow_spec) == flow_spec.field_names
    assert len(flow_spec) == 4


def test_registry_is_read_only(flow_spec):
    with pytest.raises(TypeError):
        flow_spec["extra"] = FieldRule(fetch_options=fetch_nothing)


def test_unknown_dependency_rejected():
    with pytest.raises(UnknownFieldError) as exc_info:
        FieldSpecRegistry({"a": FieldRule(requires=["b"], fetch_options=fetch_nothing)})

    assert exc_info.value.field == "a"
    assert exc_info.value.unknown == ["b"]


def test_unknown_influence_rejected():
    with pytest.raises(UnknownFieldError):
        FieldSpecRegistry({"a": FieldRule(influenced_by=["b"], fetch_options=fetch_nothing)})


def test_self_reference_rejected():
    with pytest.raises(SelfReferenceError):
        FieldSpecRegistry({"a": FieldRule(influenced_by=["a"], fetch_options=fetch_nothing)})


def test_requires_cycle_rejected():
    with pytest.raises(SpecCycleError) as exc_info:
        FieldSpecRegistry({
            "a": FieldRule(requires=["b"], fetch_options=fetch_nothing),
            "b": FieldRule(requires=["a"], fetch_options=fetch_nothing),
        })

    assert len(exc_info.value.cycles) == 1
    assert set(exc_info.value.cycles[0]) == {"a", "b"}
    assert "Cycle detected in requires graph" in str(exc_info.value)


def test_mutual_influence_is_allowed():
    spec = FieldSpecRegistry({
        "a": FieldRule(influenced_by=["b"], fetch_options=fetch_nothing),
        "b": FieldRule(influenced_by=["a"], fetch_options=fetch_nothing),
    })
    assert spec.field_names == ["a", "b"]


def test_rule_needs_validate_or_fetch_options():
    with pytest.raises(SpecDefinitionError):
        FieldRule(description="nothing to check with")


def test_rule_dependency_lists_become_tuples():
    rule = FieldRule(requires=["a"], influenced_by=["b"], fetch_options=fetch_nothing)

    assert rule.requires == ("a",)
    assert rule.dependencies == ("a", "b")
    assert rule.uses_options


def test_validator_rule_offers_allowed_options_as_choices(validation_spec):
    options = asyncio.run(validation_spec["departure"].options_for({}))

    assert options[0] == OptionChoice(id="London", value="London")
    assert [option.value for option in options] == ["London", "Berlin", "Paris", "New York"]


# ==============================================================================
# SpecBuilder
# ==============================================================================

def test_builder_requires_every_field():
    builder = SpecBuilder(["a", "b"]).field("a", fetch_options=fetch_nothing)

    assert builder.missing == ["b"]
    with pytest.raises(IncompleteSpecError) as exc_info:
        builder.build()
    assert exc_info.value.missing == ["b"]


def test_builder_rejects_undeclared_field():
    with pytest.raises(SpecDefinitionError):
        SpecBuilder(["a"]).field("b", fetch_options=fetch_nothing)


def test_builder_rejects_duplicate_rule():
    builder = SpecBuilder(["a"]).field("a", fetch_options=fetch_nothing)
    with pytest.raises(SpecDefinitionError):
        builder.field("a", fetch_options=fetch_nothing)


def test_builder_orders_by_declaration():
    spec = (
        SpecBuilder(["first", "second"])
        .field("second", requires=["first"], fetch_options=fetch_nothing)
        .field("first", rule=FieldRule(fetch_options=fetch_nothing))
        .build()
    )
    assert spec.field_names == ["first", "second"]


def test_builder_from_pydantic_model():
    builder = SpecBuilder.for_model(AirlineBooking)
    assert builder.missing == ["departure", "arrival", "date", "passengers"]


def test_builder_checks_the_built_spec():
    builder = (
        SpecBuilder(["a", "b"])
        .field("a", requires=["b"], fetch_options=fetch_nothing)
        .field("b", requires=["a"], fetch_options=fetch_nothing)
    )
    with pytest.raises(SpecCycleError):
        builder.build()

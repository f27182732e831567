from paramflow.domain.models import OptionChoice
from paramflow.state.models import (
    AvailableOptions,
    ElicitationSession,
    EmptyState,
    Parameter,
    ProvidedState,
    SpecifiedState,
    UnknownOptions,
)


def test_new_parameter_is_empty_with_unknown_options():
    param = Parameter()

    assert isinstance(param.state, EmptyState)
    assert isinstance(param.options, UnknownOptions)
    assert not param.is_specified


def test_parameter_state_parses_by_tag():
    param = Parameter.model_validate({
        "state": {"tag": "provided", "value": "Berlin"},
        "options": {"tag": "available", "variants": [{"id": "BER", "value": "Berlin"}]},
    })

    assert param.state == ProvidedState(value="Berlin")
    assert param.options == AvailableOptions(variants=[OptionChoice(id="BER", value="Berlin")])


def test_session_tracks_pending_fields():
    session = ElicitationSession(parameters={
        "departure": Parameter(state=SpecifiedState(value="Berlin")),
        "arrival": Parameter(state=ProvidedState(value="Lond")),
        "date": Parameter(),
    })

    assert not session.all_specified
    assert session.pending == ["arrival", "date"]
    assert session.values() == {"departure": "Berlin"}

"""
Engine - Interactive Parameter Elicitation

The ElicitationEngine is the deterministic state machine that acquires a
complete domain value field by field, delegating every outside interaction
(fetching options, asking a question, resolving free text) to injected
collaborators.
-----------------------------------------------

Every field carries a ParameterState (empty -> provided -> specified) and a
ParameterOptions (unknown -> available). The pure step function scans the
fields in declared order and proposes exactly one action; the run loop
performs it, updates the session, and asks again until every field is
specified.

Priority of actions for the first field that matches:
1. Provided text with no options at all -> refuse (fatal).
2. Provided text with options -> specify it.
3. Provided text, options unknown, requirements met -> fetch options.
4. Specified -> nothing to do.
5. Empty, requirements met -> fetch options and ask.

Exactly one field action is in flight at a time; state updates are
serialized through the run loop.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from ..domain.models import FieldRule, OptionChoice
from ..domain.registry import FieldSpecRegistry, ensure_acyclic
from ..exceptions import EmptyOptionsRefusal, EngineStuck
from ..services.asker import Asker, QuestionWriter, TemplateQuestionWriter
from ..services.specifier import ExactMatchSpecifier, Specifier
from ..state.models import (
    AvailableOptions,
    ElicitationSession,
    EmptyState,
    Parameter,
    ProvidedState,
    SpecifiedState,
)
from .schemas.flow_step import FlowStep, FlowStepType

logger = logging.getLogger(__name__)


# ==============================================================================
# Pure helpers (no I/O, no mutation)
# ==============================================================================

def are_requirements_specified(rule: FieldRule, session: ElicitationSession) -> bool:
    return all(session[dep].is_specified for dep in rule.requires)


def combine_dependency_values(rule: FieldRule, session: ElicitationSession) -> Dict[str, Any]:
    """
    Collects the filters for fetching a field's options: every required value
    plus the influencing values that are already specified.
    """
    filters: Dict[str, Any] = {}
    for dep in rule.requires + rule.influenced_by:
        state = session[dep].state
        if isinstance(state, SpecifiedState):
            filters[dep] = state.value
    return filters


def next_flow_step(spec: Mapping[str, FieldRule], session: ElicitationSession) -> FlowStep:
    """
    Proposes the next action for the session.

    Raises:
        EngineStuck: no field can make progress although some are unresolved.
            Only happens with a malformed (unchecked) spec.
    """
    if session.all_specified:
        return FlowStep(type=FlowStepType.DONE, values=session.values())

    for key, rule in spec.items():
        param = session[key]
        state, options = param.state, param.options

        if isinstance(state, ProvidedState):
            if isinstance(options, AvailableOptions):
                if not options.variants:
                    return FlowStep(type=FlowStepType.REFUSE_EMPTY_OPTIONS, key=key, user_value=state.value)
                return FlowStep(
                    type=FlowStepType.NEED_SPECIFY,
                    key=key,
                    user_value=state.value,
                    options=list(options.variants),
                )
            if are_requirements_specified(rule, session):
                return FlowStep(
                    type=FlowStepType.NEED_FETCH_FOR_UPDATE,
                    key=key,
                    filters=combine_dependency_values(rule, session),
                )
            continue

        if isinstance(state, SpecifiedState):
            continue

        if isinstance(state, EmptyState) and are_requirements_specified(rule, session):
            return FlowStep(
                type=FlowStepType.NEED_FETCH_FOR_ASK,
                key=key,
                filters=combine_dependency_values(rule, session),
            )

    raise EngineStuck(session.pending)


async def init_params(
    spec: Mapping[str, FieldRule],
    provided: Optional[Mapping[str, str]] = None,
) -> ElicitationSession:
    """
    Creates the session state for a spec.

    Fields without requirements get their options fetched up front, since
    nothing blocks them. Raw texts in `provided` seed fields as already
    answered, e.g. values the user mentioned before being asked.
    """
    provided = provided or {}
    unknown = [key for key in provided if key not in spec]
    if unknown:
        raise ValueError(f"Cannot provide values for undeclared field(s): {', '.join(unknown)}")

    session = ElicitationSession()
    for key, rule in spec.items():
        param = Parameter()
        if key in provided:
            param.state = ProvidedState(value=provided[key])
        if not rule.requires:
            param.options = AvailableOptions(variants=await rule.options_for({}))
        session.parameters[key] = param
    return session


# ==============================================================================
# The Engine
# ==============================================================================

class ElicitationEngine:
    def __init__(
        self,
        spec: Mapping[str, FieldRule],
        asker: Asker,
        specifier: Optional[Specifier] = None,
        question_writer: Optional[QuestionWriter] = None,
        log: Optional[logging.Logger] = None,
    ):
        if isinstance(spec, FieldSpecRegistry):
            ensure_acyclic(spec)
        else:
            spec = FieldSpecRegistry(spec)
        self.spec = spec
        self.asker = asker
        self.specifier = specifier or ExactMatchSpecifier()
        self.question_writer = question_writer or TemplateQuestionWriter()
        self.logger = log or logger

    async def start(self, provided: Optional[Mapping[str, str]] = None) -> ElicitationSession:
        return await init_params(self.spec, provided)

    def next_step(self, session: ElicitationSession) -> FlowStep:
        return next_flow_step(self.spec, session)

    async def run(
        self,
        session: Optional[ElicitationSession] = None,
        provided: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, Any]:
        """
        Drives the session until every field is specified.

        Returns:
            The resolved domain value, keyed by field name in declared order.

        Raises:
            EmptyOptionsRefusal: a provided answer has no options to match.
            EngineStuck: the spec allows no progress.
            Any error raised by a collaborator, unchanged.
        """
        if session is None:
            session = await self.start(provided)

        while True:
            step = await self.advance(session)
            if step.type == FlowStepType.DONE:
                return step.values

    async def advance(self, session: ElicitationSession) -> FlowStep:
        """
        Performs a single step and mutates the session accordingly.

        Returns the step that was performed.
        """
        step = self.next_step(session)
        self.logger.debug(f"Flow step {step.type.name} for field '{step.key}'")

        if step.type == FlowStepType.DONE:
            return step

        if step.type == FlowStepType.REFUSE_EMPTY_OPTIONS:
            # Hard failure: no backtracking into fields that are already specified.
            self.logger.warning(f"No options left for field '{step.key}'; aborting elicitation")
            raise EmptyOptionsRefusal(step.key, step.user_value)

        if step.type == FlowStepType.NEED_SPECIFY:
            await self._specify(session, step.key, step.user_value, step.options)
        elif step.type == FlowStepType.NEED_FETCH_FOR_UPDATE:
            await self._fetch(session, step.key, step.filters)
        elif step.type == FlowStepType.NEED_FETCH_FOR_ASK:
            await self._fetch_and_ask(session, step.key, step.filters)

        return step

    # ==========================================================================
    # State Mutation (one field at a time)
    # ==========================================================================

    async def _fetch(self, session: ElicitationSession, key: str, filters: Dict[str, Any]) -> AvailableOptions:
        options = AvailableOptions(variants=await self.spec[key].options_for(filters))
        session[key].options = options
        self.logger.debug(f"Fetched {len(options.variants)} option(s) for '{key}'")
        return options

    async def _specify(self, session: ElicitationSession, key: str, raw_text: str, candidates: List[OptionChoice]) -> None:
        choice = await self.specifier.specify(raw_text, candidates, key)
        session[key].state = SpecifiedState(value=choice.value)
        self.logger.info(f"Field '{key}' specified as '{choice.id}'")

    async def _fetch_and_ask(self, session: ElicitationSession, key: str, filters: Dict[str, Any]) -> None:
        options = await self._fetch(session, key, filters)
        question = await self.question_writer.compose(key, self.spec[key].description, options.variants)
        answer = await self.asker.ask(question)
        session[key].state = ProvidedState(value=answer)

        if options.variants:
            await self._specify(session, key, answer, options.variants)
        # With no variants the next step refuses the answer.


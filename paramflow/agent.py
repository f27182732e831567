"""
Agents - Flow-Decorated Methods

An agent exposes one or more "flows": methods whose single argument is a
domain value resolved through the elicitation engine. The @flow decorator
attaches the field spec to the method; AgentBase discovers those methods and
runs the elicitation before calling them.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Mapping, Optional

from .domain.models import FieldRule, resolve
from .domain.registry import FieldSpecRegistry
from .execution.engine import ElicitationEngine
from .services.asker import Asker, QuestionWriter
from .services.specifier import Specifier

logger = logging.getLogger(__name__)

FLOW_SPEC_ATTR = "__paramflow_spec__"


def flow(spec: Mapping[str, FieldRule]) -> Callable[[Callable], Callable]:
    """
    Method decorator marking a method as a flow over the given spec.

    The spec is checked when the decorator is applied, so a malformed spec
    fails at class definition time.
    """
    registry = spec if isinstance(spec, FieldSpecRegistry) else FieldSpecRegistry(spec)

    def decorator(method: Callable) -> Callable:
        if not callable(method):
            raise TypeError(f"@flow can only be applied to methods; got {type(method).__name__}")
        setattr(method, FLOW_SPEC_ATTR, registry)
        return method

    return decorator


class AgentBase(ABC):
    """
    Base class for agents exposing flows.
    """

    @abstractmethod
    async def get_name(self) -> str:
        pass

    @abstractmethod
    async def get_description(self) -> str:
        pass

    @classmethod
    def flows(cls) -> Dict[str, FieldSpecRegistry]:
        """Returns flow name -> spec, subclasses overriding their bases."""
        found: Dict[str, FieldSpecRegistry] = {}
        for klass in reversed(cls.__mro__):
            for name, member in vars(klass).items():
                spec = getattr(member, FLOW_SPEC_ATTR, None)
                if spec is not None:
                    found[name] = spec
                else:
                    found.pop(name, None)
        return found

    async def describe(self) -> str:
        name = await self.get_name()
        description = await self.get_description()
        lines = [f"Agent: {name}", f"Description: {description}", "Available flows:"]
        lines.extend(f"- {flow_name}" for flow_name in self.flows())
        return "\n".join(lines)

    async def run_flow(
        self,
        flow_name: str,
        asker: Asker,
        specifier: Optional[Specifier] = None,
        question_writer: Optional[QuestionWriter] = None,
        provided: Optional[Mapping[str, str]] = None,
    ) -> Any:
        """
        Elicits the parameters of a flow, then calls the flow with them.
        """
        flows = self.flows()
        if flow_name not in flows:
            raise ValueError(f"'{flow_name}' is not a flow of {type(self).__name__}")

        engine = ElicitationEngine(
            flows[flow_name],
            asker=asker,
            specifier=specifier,
            question_writer=question_writer,
        )
        values = await engine.run(provided=provided)
        logger.info(f"Running flow '{flow_name}' with {values}")
        return await resolve(getattr(self, flow_name)(values))

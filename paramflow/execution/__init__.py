"""
Execution Layer - Batch Fixup and Interactive Elicitation

Defines the FixupCompiler (one-shot validation of a partial input) and the
ElicitationEngine (multi-turn acquisition of missing values) that both
consume the same field spec.
"""

from paramflow.execution.engine import (
    ElicitationEngine,
    init_params,
    next_flow_step,
)
from paramflow.execution.fixup import FixupCompiler, compile_fixup
from paramflow.execution.schemas.flow_step import FlowStep, FlowStepType


__all__ = [
    "ElicitationEngine",
    "FixupCompiler",
    "FlowStep",
    "FlowStepType",
    "compile_fixup",
    "init_params",
    "next_flow_step",
]

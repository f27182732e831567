"""
Fixup - One-Shot Batch Validation

The FixupCompiler takes a field spec and a partial, possibly untrusted input
(typically the arguments of an LLM tool call) and, in a single pass, either
accepts a fully validated domain value or rejects it with feedback for every
field.
-----------------------------------------------

The pass walks fields in declared order. A field is only evaluated once all
of its required fields are present and were found valid earlier in the same
pass; otherwise it is reported as waiting on exactly those fields. A valid
field unlocks everything that depends on it, so one round-trip gives the
caller complete guidance: what is wrong, what is allowed, and what must be
fixed first.
"""

import logging
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from ..domain.models import (
    FieldCheckContext,
    FieldRule,
    ValidationErr,
    ValidationOk,
    ValidationSkip,
    resolve,
    same_value,
)
from ..domain.registry import FieldSpecRegistry, ensure_acyclic
from ..schemas.feedback import FieldFeedback, FixupAccepted, FixupRejected

logger = logging.getLogger(__name__)

NO_MATCHING_OPTIONS = "no matching options"

# Marks a field that produced no value to store.
_UNSET = object()


class FixupCompiler:
    def __init__(self, spec: Mapping[str, FieldRule], log: Optional[logging.Logger] = None):
        if isinstance(spec, FieldSpecRegistry):
            ensure_acyclic(spec)
        else:
            spec = FieldSpecRegistry(spec)
        self.spec = spec
        self.logger = log or logger

    async def __call__(self, partial: Mapping[str, Any]) -> Union[FixupAccepted, FixupRejected]:
        return await self.fixup(partial)

    async def fixup(self, partial: Mapping[str, Any]) -> Union[FixupAccepted, FixupRejected]:
        """
        Validates and normalizes a partial input in one pass.

        Args:
            partial: field name -> raw value. Missing keys and None values
                count as absent; keys that are not declared fields are ignored.

        Returns:
            FixupAccepted with the normalized domain value when every field is
            valid, otherwise FixupRejected with feedback for every field.
        """
        # 1. Normalize every present value independently
        normalized = self._normalize_all(partial)
        whole_input = MappingProxyType(dict(partial))

        results: Dict[str, FieldFeedback] = {}
        resolved: Dict[str, Any] = {}

        # 2. Evaluate in declared order
        for name, rule in self.spec.items():
            unmet = [dep for dep in rule.requires if dep not in resolved]
            if unmet:
                # 3. Not ready: report what must be fixed first, evaluate nothing
                results[name] = FieldFeedback(valid=False, needs_valid_fields=unmet)
                self.logger.debug(f"Field '{name}' waits on {unmet}")
                continue

            # 4. Ready: required values plus whichever soft dependencies are already valid
            context = {dep: resolved[dep] for dep in rule.requires}
            context.update({dep: resolved[dep] for dep in rule.influenced_by if dep in resolved})

            value = normalized.get(name)
            if rule.uses_options:
                feedback, stored = await self._check_options(rule, value, context, whole_input)
            else:
                feedback, stored = await self._check_validator(name, rule, value, context)

            results[name] = feedback
            if feedback.valid:
                resolved[name] = stored
            self.logger.debug(f"Field '{name}' valid={feedback.valid}")

        # 6. Accept only when every field is valid and holds a value
        if all(fb.valid for fb in results.values()) and len(resolved) == len(self.spec):
            self.logger.debug("Fixup accepted")
            return FixupAccepted(value={name: resolved[name] for name in self.spec})

        rejected = FixupRejected(validation_results=results)
        self.logger.debug(f"Fixup rejected; invalid fields: {rejected.invalid_fields}")
        return rejected

    # ==========================================================================
    # Per-field checks
    # ==========================================================================

    async def _check_options(
        self,
        rule: FieldRule,
        value: Any,
        context: Dict[str, Any],
        whole_input: Mapping[str, Any],
    ) -> Tuple[FieldFeedback, Any]:
        """
        5. Combines fetched options, the value and the supplementary check,
        in priority order.
        """
        options = await rule.options_for(context)
        allowed = [option.value for option in options]

        if not options:
            return FieldFeedback(valid=False, allowed_options=[], refusal_reason=NO_MATCHING_OPTIONS), _UNSET

        if value is None:
            return FieldFeedback(valid=False, allowed_options=allowed), _UNSET

        if not any(same_value(option.value, value) for option in options):
            return FieldFeedback(valid=False, allowed_options=allowed, refusal_reason=NO_MATCHING_OPTIONS), _UNSET

        if rule.validate is not None:
            refusal = await resolve(
                rule.validate(value, FieldCheckContext(options_for_field=options, whole_input=whole_input))
            )
            if refusal:
                return FieldFeedback(valid=False, allowed_options=allowed, refusal_reason=refusal), _UNSET

        return FieldFeedback(valid=True, allowed_options=allowed), value

    async def _check_validator(
        self,
        name: str,
        rule: FieldRule,
        value: Any,
        context: Dict[str, Any],
    ) -> Tuple[FieldFeedback, Any]:
        result = await resolve(rule.validate(value, context))

        if isinstance(result, ValidationOk):
            stored = value if result.normalized_value is None else result.normalized_value
            if stored is None:
                # Accepted with nothing to store: the field stays unresolved.
                return FieldFeedback(valid=False, allowed_options=result.allowed_options), _UNSET
            return FieldFeedback(valid=True, allowed_options=result.allowed_options), stored

        if isinstance(result, ValidationErr):
            return FieldFeedback(
                valid=False,
                allowed_options=result.allowed_options,
                refusal_reason=result.refusal_reason,
            ), _UNSET

        if isinstance(result, ValidationSkip):
            return FieldFeedback(valid=False, allowed_options=result.allowed_options), _UNSET

        raise TypeError(
            f"Validator for field '{name}' returned {type(result).__name__}, expected a ValidationResult"
        )

    # ==========================================================================
    # Standard Helpers
    # ==========================================================================

    def _normalize_all(self, partial: Mapping[str, Any]) -> Dict[str, Any]:
        normalized: Dict[str, Any] = {}
        for name, raw in partial.items():
            if name not in self.spec:
                self.logger.debug(f"Ignoring undeclared input field '{name}'")
                continue
            if raw is None:
                continue
            try:
                value = self.spec[name].normalize_value(raw)
            except (ValueError, TypeError) as e:
                self.logger.debug(f"Field '{name}' failed to normalize ({e}); treated as absent")
                continue
            if value is None:
                self.logger.debug(f"Field '{name}' failed to normalize; treated as absent")
                continue
            normalized[name] = value
        return normalized


def compile_fixup(
    spec: Mapping[str, FieldRule], log: Optional[logging.Logger] = None
) -> FixupCompiler:
    """Checks the spec once and returns a reusable, awaitable fixup function."""
    return FixupCompiler(spec, log=log)

"""
Command boundary: the three user commands (draw, chat, audit).

Errors from decoding, execution and transport stop here and become messages;
nothing below this module prints to the user except the executor reporter.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from .config import REQUIRED_LAYERS
from .decoder import decode_plan
from .errors import CadAgentError, DecodeError, ExecutionError, TransportError
from .executor import Executor
from .space import Space
from .tools.context import audit_layers, drawing_context

log = logging.getLogger(__name__)

PREFIX = "[CADAssistant]"

Completion = Callable[[str], str]


@dataclass
class PlanOutcome:
    ok: bool
    message: str
    actions: int = 0
    error: Optional[CadAgentError] = None


def apply_plan(raw_text: str, space: Space, reporter=print) -> PlanOutcome:
    """Decode and execute one plan. The space is untouched unless everything succeeded."""
    try:
        plan = decode_plan(raw_text)
    except DecodeError as e:
        return PlanOutcome(False, f"{PREFIX} {e}", error=e)

    try:
        Executor(reporter=reporter).run(plan, space)
    except ExecutionError as e:
        log.warning("plan execution failed: %s", e)
        return PlanOutcome(False, f"{PREFIX} Error executing plan: {e}", len(plan.actions), e)

    return PlanOutcome(True, f"{PREFIX} Plan executed.", len(plan.actions))


def ai_draw(space: Space, request: str, plan_text: Completion, reporter=print) -> List[str]:
    """Ask the model for a plan describing ``request`` and apply it."""
    messages: List[str] = []
    prompt = f"Drawing context:\n{drawing_context(space)}\nUser request: {request}"
    try:
        raw = plan_text(prompt)
    except TransportError as e:
        return [f"{PREFIX} {e}"]

    if not raw or not raw.strip():
        return [f"{PREFIX} Empty plan from AI."]

    messages.append(f"{PREFIX} Plan JSON (raw):\n{raw}")
    outcome = apply_plan(raw, space, reporter=reporter)
    messages.append(outcome.message)
    return messages


def ai_chat(space: Space, message: str, chat_text: Completion) -> str:
    prompt = f"Drawing context:\n{drawing_context(space)}\nUser: {message}"
    try:
        answer = chat_text(prompt)
    except TransportError as e:
        answer = str(e)
    return f"{PREFIX}\n{answer}"


def ai_audit_layers(space: Space, required: Optional[Iterable[str]] = None) -> List[str]:
    findings = audit_layers(space, REQUIRED_LAYERS if required is None else required)
    return findings + ["Layer audit finished."]

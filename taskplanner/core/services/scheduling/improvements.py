from __future__ import annotations

import dataclasses
import json
import logging
from typing import List, Protocol, Sequence

from taskplanner.core.domain.enums import WarningSeverity
from taskplanner.core.domain.task import TaskInput
from taskplanner.core.services.scheduling.models import SchedulingResult

logger = logging.getLogger(__name__)

MAX_IMPROVEMENTS = 3

FALLBACK_IMPROVEMENTS = (
    "Review task priorities and postpone the less important tasks.",
    "Identify tasks that can run in parallel and split them across team members.",
    "Re-estimate each task and correct estimates that are too generous.",
)


class ScheduleImprovementProvider(Protocol):
    """External text-generation service; returns raw model output for a prompt."""

    def generate_improvements(self, prompt: str) -> str: ...


def build_improvement_prompt(result: SchedulingResult, tasks: Sequence[TaskInput]) -> str:
    problems = "\n".join(
        f"- {w.message}" for w in result.warnings if w.severity == WarningSeverity.CRITICAL
    )
    return (
        "The following project schedule has serious problems. Propose improvements.\n\n"
        f"Problems:\n{problems}\n\n"
        f"Task count: {len(tasks)}\n"
        f"Critical path: {len(result.critical_path)} task(s)\n"
        f"Resource utilization: {result.utilization_rate:.1f}%\n\n"
        f"Propose at most {MAX_IMPROVEMENTS} concise improvements.\n"
        "Answer as JSON in the following form:\n"
        '{\n  "improvements": [\n    "improvement 1",\n    "improvement 2",\n    "improvement 3"\n  ]\n}\n'
    )


def parse_improvements(text: str) -> List[str]:
    """Parse ``{"improvements": [...]}``, tolerating a fenced code block around it."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = cleaned.strip("`").strip()
        if cleaned.lower().startswith("json"):
            cleaned = cleaned[4:]
    payload = json.loads(cleaned)
    items = payload.get("improvements", []) if isinstance(payload, dict) else []
    return [str(item).strip() for item in items if str(item).strip()][:MAX_IMPROVEMENTS]


def append_ai_improvements(
    result: SchedulingResult,
    tasks: Sequence[TaskInput],
    provider: ScheduleImprovementProvider,
) -> SchedulingResult:
    """
    Caller-side hook: when the result carries a critical warning, ask the
    provider for improvements and return a copy with them appended. A failing
    provider falls back to canned advice.
    """
    if not result.has_severity(WarningSeverity.CRITICAL):
        return result

    prompt = build_improvement_prompt(result, tasks)
    try:
        improvements = parse_improvements(provider.generate_improvements(prompt))
    except Exception as exc:
        logger.warning("Failed to generate schedule improvements: %s", exc)
        improvements = list(FALLBACK_IMPROVEMENTS)

    return dataclasses.replace(result, suggestions=(*result.suggestions, *improvements))


__all__ = [
    "MAX_IMPROVEMENTS",
    "FALLBACK_IMPROVEMENTS",
    "ScheduleImprovementProvider",
    "build_improvement_prompt",
    "parse_improvements",
    "append_ai_improvements",
]

import logging
from datetime import date

import pytest

from taskplanner.core.services.scheduling.improvements import (
    FALLBACK_IMPROVEMENTS,
    append_ai_improvements,
    build_improvement_prompt,
    parse_improvements,
)


class StaticProvider:
    def __init__(self, text):
        self.text = text
        self.prompts = []

    def generate_improvements(self, prompt):
        self.prompts.append(prompt)
        return self.text


class FailingProvider:
    def generate_improvements(self, prompt):
        raise ConnectionError("service unavailable")


@pytest.fixture
def tasks(make_task):
    return [make_task(f"t{i}", hours=40) for i in range(3)]


@pytest.fixture
def critical_result(engine, tasks, make_options):
    return engine.generate_schedule(tasks, make_options(end=date(2024, 1, 5)))


def test_improvements_are_appended_after_suggestions(critical_result, tasks):
    provider = StaticProvider('{"improvements": ["Cut scope", "Add people", "Move deadline", "Extra"]}')

    improved = append_ai_improvements(critical_result, tasks, provider)

    assert improved.suggestions[: len(critical_result.suggestions)] == critical_result.suggestions
    assert improved.suggestions[len(critical_result.suggestions):] == (
        "Cut scope",
        "Add people",
        "Move deadline",
    )
    assert improved.schedules == critical_result.schedules


def test_prompt_lists_critical_problems(critical_result, tasks):
    provider = StaticProvider('{"improvements": []}')
    append_ai_improvements(critical_result, tasks, provider)

    (prompt,) = provider.prompts
    assert "Task count: 3" in prompt
    assert "Resource utilization: 100.0%" in prompt
    assert "cannot be completed before the project end date" in prompt
    assert prompt == build_improvement_prompt(critical_result, tasks)


def test_fenced_json_is_accepted():
    text = '```json\n{"improvements": ["Split task A", "  "]}\n```'
    assert parse_improvements(text) == ["Split task A"]


def test_failing_provider_falls_back(critical_result, tasks, caplog):
    with caplog.at_level(logging.WARNING):
        improved = append_ai_improvements(critical_result, tasks, FailingProvider())

    assert improved.suggestions[-3:] == FALLBACK_IMPROVEMENTS
    assert "service unavailable" in caplog.text


def test_unparseable_answer_falls_back(critical_result, tasks):
    improved = append_ai_improvements(critical_result, tasks, StaticProvider("no idea"))
    assert improved.suggestions[-3:] == FALLBACK_IMPROVEMENTS


def test_provider_not_called_without_critical_warning(engine, make_task, make_options):
    result = engine.generate_schedule([make_task("a")], make_options())
    provider = StaticProvider('{"improvements": ["x"]}')

    assert append_ai_improvements(result, [make_task("a")], provider) is result
    assert provider.prompts == []

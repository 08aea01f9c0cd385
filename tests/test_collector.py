import pytest

from funnel_blueprint.collector import AnswerCollector, CollectorRegistry
from funnel_blueprint.dictionaries import FUNNEL_CRAFT_QUESTIONS

from conftest import load_answers


def test_collector_walks_all_questions():
    answers = load_answers("coach-sarah").as_list()
    collector = AnswerCollector()
    assert collector.total == 9
    assert collector.current_prompt == FUNNEL_CRAFT_QUESTIONS[0]

    for index, answer in enumerate(answers[:-1], start=1):
        assert collector.submit_answer(answer) == FUNNEL_CRAFT_QUESTIONS[index]

    assert collector.submit_answer(answers[-1]) is None
    assert collector.is_complete
    assert collector.to_answers().as_list() == answers


def test_answers_are_stripped():
    collector = AnswerCollector(questions=["Q1"])
    collector.submit_answer("  spaced out  ")
    assert collector.answers == ("spaced out",)


def test_blank_answer_is_rejected():
    collector = AnswerCollector()
    with pytest.raises(ValueError):
        collector.submit_answer("   ")
    assert collector.index == 0


def test_no_answers_after_completion():
    collector = AnswerCollector(questions=["Q1"])
    collector.submit_answer("done")
    with pytest.raises(RuntimeError):
        collector.submit_answer("again")


def test_incomplete_collector_has_no_answers():
    collector = AnswerCollector()
    collector.submit_answer("first")
    with pytest.raises(RuntimeError):
        collector.to_answers()


def test_registry_restarts_and_discards():
    registry = CollectorRegistry()
    first = registry.start("acct-1")
    first.submit_answer("something")

    restarted = registry.start("acct-1")
    assert restarted is not first
    assert registry.get("acct-1").index == 0

    registry.discard("acct-1")
    assert registry.get("acct-1") is None

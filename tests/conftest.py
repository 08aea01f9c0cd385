from pathlib import Path

import pytest

from funnel_blueprint.blueprint_parser import parse_blueprint
from funnel_blueprint.generator import BlueprintGenerator
from funnel_blueprint.models.answers import FunnelAnswers

FIXTURE_DIR = Path(__file__).resolve().parents[1] / "data" / "answers"

AUTHOR = "Sarah Lee"
DATE = "March 3, 2025"


def load_answers(name: str) -> FunnelAnswers:
    fixture_path = FIXTURE_DIR / f"{name}.json"
    return FunnelAnswers.model_validate_json(fixture_path.read_text(encoding="utf-8"))


@pytest.fixture
def answers() -> FunnelAnswers:
    return load_answers("coach-sarah")


@pytest.fixture
def document(answers: FunnelAnswers) -> str:
    return BlueprintGenerator().generate(answers, AUTHOR, DATE)


@pytest.fixture
def content(document: str):
    return parse_blueprint(document)

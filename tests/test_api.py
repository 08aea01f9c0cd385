import json
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from funnel_blueprint.account_store import InMemoryAccountStore
from funnel_blueprint.collector import CollectorRegistry
from funnel_blueprint.dictionaries import FUNNEL_CRAFT_QUESTIONS
from funnel_blueprint.generation_guard import GenerationGuard
from funnel_blueprint.phase_data import BlueprintPersister
from funnel_blueprint.vertex_ai_adapter import VertexAIAdapter
from services.api import main

from conftest import load_answers

FUNNEL_COPY_REQUEST = {
    "coaching_type": "Sleep coaching",
    "ideal_client": "Busy moms",
    "main_problem": "Poor sleep",
    "lead_magnet": "Calm Evening Reset",
}


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(main, "persister", BlueprintPersister(InMemoryAccountStore()))
    monkeypatch.setattr(main, "collectors", CollectorRegistry())
    monkeypatch.setattr(main, "generation_guard", GenerationGuard())
    monkeypatch.setattr(main, "vertex_adapter", None)
    return TestClient(main.app)


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "questions": 9}


def test_craft_conversation_generates_and_saves_blueprint(client):
    start = client.post("/v1/accounts/acct-1/craft:start")
    assert start.status_code == 200
    assert start.json()["prompt"] == FUNNEL_CRAFT_QUESTIONS[0]
    assert start.json()["total_questions"] == 9

    answers = load_answers("coach-sarah").as_list()
    for answer in answers[:-1]:
        response = client.post("/v1/accounts/acct-1/craft/answers", json={"answer": answer})
        assert response.status_code == 200
        assert response.json()["complete"] is False

    final = client.post(
        "/v1/accounts/acct-1/craft/answers",
        json={"answer": answers[-1], "author_name": "Sarah Lee"},
    )
    body = final.json()
    assert body["complete"] is True
    assert body["saved"] is True
    assert "Created for: Sarah Lee" in body["blueprint"]

    stored = client.get("/v1/accounts/acct-1/blueprint")
    assert stored.json()["blueprint"] == body["blueprint"]

    progress = client.get("/v1/accounts/acct-1/progress").json()
    assert progress["funnel_craft_complete"] is True
    assert progress["can_build"] is True
    assert progress["progress_percent"] == 20


def test_blank_answer_is_rejected(client):
    client.post("/v1/accounts/acct-1/craft:start")
    response = client.post("/v1/accounts/acct-1/craft/answers", json={"answer": "  "})
    assert response.status_code == 422


def test_generate_blueprint_and_read_content(client):
    answers = load_answers("coach-sarah").as_list()
    response = client.post(
        "/v1/accounts/acct-2/blueprint:generate",
        json={"answers": answers, "author_name": "Sarah Lee", "date": "March 3, 2025"},
    )
    assert response.status_code == 200
    assert response.json()["saved"] is True

    content = client.get("/v1/accounts/acct-2/blueprint/content").json()
    assert content["landingPage"]["heroHeadline"] == "The Calm Evening Reset"
    assert len(content["emails"]) == 4
    assert content["emails"][0]["subjectLine"].startswith("Your The Calm Evening Reset")
    assert len(content["socialCapture"]["postCTAs"]) == 3
    assert len(content["leadMagnetWorkflow"]["postCTAs"]) == 2

    sections = client.get("/v1/accounts/acct-2/blueprint/sections").json()
    assert set(sections) == {"lead_magnet", "landing_page", "emails", "social_capture"}


def test_generate_blueprint_needs_nine_answers(client):
    response = client.post("/v1/accounts/acct-2/blueprint:generate", json={"answers": ["one"] * 8})
    assert response.status_code == 422


def test_missing_blueprint_is_not_found(client):
    assert client.get("/v1/accounts/nobody/blueprint").status_code == 404
    assert client.get("/v1/accounts/nobody/blueprint/content").status_code == 404


def test_export_content(client, content):
    payload = {"content": content.model_dump(by_alias=True), "namespace": "emails"}
    response = client.post("/v1/blueprint/export", json=payload)
    assert response.status_code == 200
    assert response.text.startswith("EMAIL SEQUENCE")

    everything = client.post("/v1/blueprint/export", json={"content": payload["content"]})
    assert "LEAD MAGNET WORKFLOW" in everything.text

    unknown = client.post("/v1/blueprint/export", json={**payload, "namespace": "bogus"})
    assert unknown.status_code == 400


def test_update_progress(client):
    client.post(
        "/v1/accounts/acct-3/blueprint:generate",
        json={"answers": load_answers("minimal").as_list()},
    )
    response = client.put(
        "/v1/accounts/acct-3/progress",
        json={
            "lead_magnet": True,
            "landing_page": True,
            "email_sequence": True,
            "social_capture": True,
        },
    )
    body = response.json()
    assert body["funnel_build_complete"] is True
    assert body["build_progress_percent"] == 100
    assert body["phase_complete"] is True


def test_funnel_copy_requires_configuration(client):
    response = client.post("/v1/accounts/acct-4/funnel-copy:generate", json=FUNNEL_COPY_REQUEST)
    assert response.status_code == 503


class StaticModel:
    def __init__(self, text):
        self.text = text

    def generate_content(self, prompt, generation_config=None):
        return SimpleNamespace(text=self.text)


def test_funnel_copy_generation(client, monkeypatch):
    monkeypatch.setattr(
        main,
        "vertex_adapter",
        VertexAIAdapter(project_id="test-project", model=StaticModel(json.dumps({"post_caption": "x"}))),
    )
    response = client.post("/v1/accounts/acct-4/funnel-copy:generate", json=FUNNEL_COPY_REQUEST)
    assert response.status_code == 200
    assert response.json()["fallback"] is True

    with main.generation_guard.hold("acct-4"):
        busy = client.post("/v1/accounts/acct-4/funnel-copy:generate", json=FUNNEL_COPY_REQUEST)
    assert busy.status_code == 409

from __future__ import annotations

import asyncio
import logging
import os
import re
import uuid
from datetime import date

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, Field

from funnel_blueprint.account_store import InMemoryAccountStore
from funnel_blueprint.blueprint_parser import parse_blueprint, split_sections
from funnel_blueprint.collector import CollectorRegistry
from funnel_blueprint.dictionaries import CRAFT_INTRO, FUNNEL_CRAFT_QUESTIONS
from funnel_blueprint.editor import ContentEditor
from funnel_blueprint.generation_guard import GenerationGuard, GenerationInProgressError
from funnel_blueprint.generator import BlueprintGenerator
from funnel_blueprint.logging_config import set_account_id, set_trace_id, setup_logging
from funnel_blueprint.models.account import Phase3Data
from funnel_blueprint.models.answers import FunnelAnswers
from funnel_blueprint.models.content import EditableContent
from funnel_blueprint.models.funnel_copy import FunnelCopy, FunnelCopyRequest
from funnel_blueprint.phase_data import BlueprintPersister


class StartCraftResponse(BaseModel):
    intro: str
    prompt: str
    question_index: int
    total_questions: int


class SubmitAnswerRequest(BaseModel):
    answer: str
    author_name: str | None = None


class SubmitAnswerResponse(BaseModel):
    next_prompt: str | None
    question_index: int
    total_questions: int
    complete: bool
    blueprint: str | None = None
    saved: bool | None = None


class GenerateBlueprintRequest(BaseModel):
    answers: list[str] = Field(min_length=9, max_length=9)
    author_name: str | None = None
    date: str | None = None


class BlueprintResponse(BaseModel):
    account_id: str
    blueprint: str
    saved: bool | None = None


class ExportRequest(BaseModel):
    content: EditableContent
    namespace: str | None = Field(default=None, description="Export one namespace; all when omitted")


class ProgressResponse(BaseModel):
    funnel_craft_complete: bool
    funnel_build_complete: bool
    lead_magnet: bool
    landing_page: bool
    email_sequence: bool
    social_capture: bool
    build_progress_percent: int
    progress_percent: int
    can_build: bool
    phase_complete: bool

    @staticmethod
    def from_phase3(data: Phase3Data) -> "ProgressResponse":
        return ProgressResponse(
            funnel_craft_complete=data.funnel_craft_complete,
            funnel_build_complete=data.funnel_build_complete,
            lead_magnet=data.lead_magnet,
            landing_page=data.landing_page,
            email_sequence=data.email_sequence,
            social_capture=data.social_capture,
            build_progress_percent=data.build_progress_percent,
            progress_percent=data.progress_percent,
            can_build=data.can_build,
            phase_complete=data.phase_complete,
        )


class UpdateProgressRequest(BaseModel):
    lead_magnet: bool | None = None
    landing_page: bool | None = None
    email_sequence: bool | None = None
    social_capture: bool | None = None


# Environment configuration
ENVIRONMENT = os.getenv("ENVIRONMENT", "dev")
PROJECT_ID = os.getenv("PROJECT_ID")
VERTEX_LOCATION = os.getenv("VERTEX_LOCATION", "asia-northeast1")
VERTEX_MODEL = os.getenv("VERTEX_MODEL", "gemini-1.5-pro")
BLUEPRINT_AUTHOR_FALLBACK = os.getenv("BLUEPRINT_AUTHOR_FALLBACK", "You")
LOG_LEVEL = os.getenv("LOG_LEVEL")

# Setup logging
setup_logging(environment=ENVIRONMENT, project_id=PROJECT_ID, level=LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="Funnel Blueprint API", version="0.1.0")

# Use Firestore in production, in-memory for dev
if ENVIRONMENT == "dev":
    account_store = InMemoryAccountStore()
else:
    from funnel_blueprint.firestore_account_store import FirestoreAccountStore

    account_store = FirestoreAccountStore(project_id=PROJECT_ID)

# Vertex AI is only available with a GCP project
if PROJECT_ID:
    from funnel_blueprint.vertex_ai_adapter import VertexAIAdapter

    vertex_adapter = VertexAIAdapter(
        project_id=PROJECT_ID, location=VERTEX_LOCATION, model_name=VERTEX_MODEL
    )
else:
    vertex_adapter = None

persister = BlueprintPersister(account_store)
blueprint_generator = BlueprintGenerator()
collectors = CollectorRegistry()
generation_guard = GenerationGuard()

_ACCOUNT_PATH = re.compile(r"^/v1/accounts/([^/]+)")


def _today_label() -> str:
    today = date.today()
    return f"{today:%B} {today.day}, {today.year}"


@app.middleware("http")
async def bind_request_context(request: Request, call_next):
    trace_header = request.headers.get("X-Cloud-Trace-Context", "")
    set_trace_id(trace_header.split("/")[0] or uuid.uuid4().hex)
    match = _ACCOUNT_PATH.match(request.url.path)
    set_account_id(match.group(1) if match else None)
    return await call_next(request)


@app.post("/v1/accounts/{account_id}/craft:start", response_model=StartCraftResponse)
async def start_craft(account_id: str) -> StartCraftResponse:
    collector = collectors.start(account_id)
    return StartCraftResponse(
        intro=CRAFT_INTRO,
        prompt=collector.current_prompt or "",
        question_index=collector.index,
        total_questions=collector.total,
    )


@app.post("/v1/accounts/{account_id}/craft/answers", response_model=SubmitAnswerResponse)
async def submit_answer(account_id: str, request: SubmitAnswerRequest) -> SubmitAnswerResponse:
    collector = collectors.get(account_id) or collectors.start(account_id)
    try:
        next_prompt = collector.submit_answer(request.answer)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except RuntimeError as exc:
        raise HTTPException(status_code=409, detail=str(exc))

    if not collector.is_complete:
        return SubmitAnswerResponse(
            next_prompt=next_prompt,
            question_index=collector.index,
            total_questions=collector.total,
            complete=False,
        )

    document = blueprint_generator.generate(
        collector.to_answers(),
        request.author_name or BLUEPRINT_AUTHOR_FALLBACK,
        _today_label(),
    )
    saved = await asyncio.to_thread(persister.save, account_id, document)
    collectors.discard(account_id)
    logger.info(
        "Funnel craft completed",
        extra={"account_id": account_id, "saved": saved, "document_length": len(document)},
    )
    return SubmitAnswerResponse(
        next_prompt=None,
        question_index=collector.index,
        total_questions=collector.total,
        complete=True,
        blueprint=document,
        saved=saved,
    )


@app.post("/v1/accounts/{account_id}/blueprint:generate", response_model=BlueprintResponse)
async def generate_blueprint(account_id: str, request: GenerateBlueprintRequest) -> BlueprintResponse:
    if any(not answer.strip() for answer in request.answers):
        raise HTTPException(status_code=422, detail="Answers must not be empty")
    document = blueprint_generator.generate(
        FunnelAnswers.from_list(request.answers),
        request.author_name or BLUEPRINT_AUTHOR_FALLBACK,
        request.date or _today_label(),
    )
    saved = await asyncio.to_thread(persister.save, account_id, document)
    return BlueprintResponse(account_id=account_id, blueprint=document, saved=saved)


async def _load_blueprint(account_id: str) -> str:
    document = await asyncio.to_thread(persister.load, account_id)
    if not document:
        raise HTTPException(status_code=404, detail="Blueprint not found")
    return document


@app.get("/v1/accounts/{account_id}/blueprint", response_model=BlueprintResponse)
async def get_blueprint(account_id: str) -> BlueprintResponse:
    document = await _load_blueprint(account_id)
    return BlueprintResponse(account_id=account_id, blueprint=document)


@app.get("/v1/accounts/{account_id}/blueprint/content", response_model=EditableContent)
async def get_blueprint_content(account_id: str) -> EditableContent:
    document = await _load_blueprint(account_id)
    return parse_blueprint(document)


@app.get("/v1/accounts/{account_id}/blueprint/sections")
async def get_blueprint_sections(account_id: str) -> dict[str, str]:
    document = await _load_blueprint(account_id)
    return split_sections(document)


@app.post("/v1/blueprint/export", response_class=PlainTextResponse)
async def export_content(request: ExportRequest) -> str:
    editor = ContentEditor(request.content)
    try:
        if request.namespace:
            return editor.serialize_section(request.namespace)
        return editor.serialize_all()
    except KeyError as exc:
        raise HTTPException(status_code=400, detail=f"Unknown namespace: {request.namespace}") from exc


@app.get("/v1/accounts/{account_id}/progress", response_model=ProgressResponse)
async def get_progress(account_id: str) -> ProgressResponse:
    try:
        data = await asyncio.to_thread(persister.get_phase3, account_id)
    except Exception as exc:
        logger.error(
            "Failed to read funnel progress",
            exc_info=True,
            extra={"account_id": account_id, "error": str(exc)},
        )
        raise HTTPException(status_code=503, detail="Progress is unavailable")
    return ProgressResponse.from_phase3(data)


@app.put("/v1/accounts/{account_id}/progress", response_model=ProgressResponse)
async def update_progress(account_id: str, request: UpdateProgressRequest) -> ProgressResponse:
    steps = request.model_dump(exclude_none=True)
    if steps:
        saved = await asyncio.to_thread(persister.update_build_progress, account_id, **steps)
        if not saved:
            raise HTTPException(status_code=503, detail="Failed to save progress")
    return await get_progress(account_id)


@app.post("/v1/accounts/{account_id}/funnel-copy:generate", response_model=FunnelCopy)
async def generate_funnel_copy(account_id: str, request: FunnelCopyRequest) -> FunnelCopy:
    if vertex_adapter is None:
        raise HTTPException(status_code=503, detail="Content generation is not configured")
    try:
        with generation_guard.hold(account_id):
            return await asyncio.to_thread(vertex_adapter.generate_funnel_copy, request)
    except GenerationInProgressError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    except Exception as exc:
        logger.error(
            "Funnel copy generation failed",
            exc_info=True,
            extra={"account_id": account_id, "error": str(exc)},
        )
        raise HTTPException(status_code=502, detail=str(exc))


@app.get("/health")
async def healthcheck() -> JSONResponse:
    return JSONResponse({"status": "ok", "questions": len(FUNNEL_CRAFT_QUESTIONS)})

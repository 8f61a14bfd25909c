"""Pytest configuration and shared fixtures"""

import os

os.environ.setdefault("CALENDLY_WEBHOOK_SECRET", "test-webhook-secret")
os.environ.setdefault("INTERNAL_API_KEY", "test-internal-key")
os.environ.setdefault("MONGO_DB", "")
os.environ.setdefault("SMTP_HOST", "")

import asyncio
import copy
import email
import json
import smtplib
import pytest
import httpx
from pymongo.errors import OperationFailure

from utils import get_settings, Capabilities
from stores.llm.LLMInterface import LLMInterface, LLMResponse
from stores.voice.VoiceSessionInterface import VoiceSessionInterface
from models.DB_schemas.candidate import Candidate, CandidateAnalysis

get_settings.cache_clear()


# ── In-memory document store ─────────────────────────────────────────────

def _matches(document: dict, filter: dict) -> bool:
    for key, expected in filter.items():
        value = document.get(key)
        if isinstance(expected, dict) and any(op.startswith("$") for op in expected):
            for op, operand in expected.items():
                if op == "$ne" and value == operand:
                    return False
                if op == "$in" and value not in operand:
                    return False
        elif value != expected:
            return False
    return True


class FakeResult:
    def __init__(self, inserted_id=None, matched_count=0, modified_count=0):
        self.inserted_id = inserted_id
        self.matched_count = matched_count
        self.modified_count = modified_count


class FakeCursor:
    def __init__(self, collection, filter):
        self.collection = collection
        self.filter = filter
        self._sort = None
        self._hint = None
        self._limit = None

    def sort(self, key, direction=1):
        self._sort = (key, direction)
        return self

    def hint(self, index_name):
        self._hint = index_name
        return self

    def limit(self, count):
        self._limit = count
        return self

    async def to_list(self, length=None):
        if self._hint and self._hint not in self.collection.index_names:
            raise OperationFailure("hint provided does not correspond to an existing index", code=2)
        records = [copy.deepcopy(doc) for doc in self.collection.documents if _matches(doc, self.filter)]
        if self._sort:
            key, direction = self._sort
            records.sort(key=lambda doc: doc.get(key) or "", reverse=direction == -1)
        limit = self._limit or length
        return records[:limit] if limit else records


class FakeCollection:
    def __init__(self, name):
        self.name = name
        self.documents: list[dict] = []
        self.index_names: set[str] = set()

    async def create_indexes(self, models):
        for model in models:
            self.index_names.add(model.document["name"])

    def find(self, filter=None):
        return FakeCursor(self, filter or {})

    async def find_one(self, filter):
        for doc in self.documents:
            if _matches(doc, filter):
                return copy.deepcopy(doc)
        return None

    async def insert_one(self, document):
        self.documents.append(copy.deepcopy(document))
        return FakeResult(inserted_id=document.get("_id"))

    async def update_one(self, filter, update, upsert=False):
        for doc in self.documents:
            if _matches(doc, filter):
                doc.update(copy.deepcopy(update.get("$set", {})))
                return FakeResult(matched_count=1, modified_count=1)
        if upsert:
            new_doc = {k: v for k, v in filter.items() if not isinstance(v, dict)}
            new_doc.update(copy.deepcopy(update.get("$set", {})))
            self.documents.append(new_doc)
        return FakeResult()

    async def count_documents(self, filter):
        return sum(1 for doc in self.documents if _matches(doc, filter))


class FakeDatabase:
    def __init__(self):
        self.collections: dict[str, FakeCollection] = {}

    def __getitem__(self, name):
        if name not in self.collections:
            self.collections[name] = FakeCollection(name)
        return self.collections[name]


# ── Fake generation backend ──────────────────────────────────────────────

def make_analysis(**overrides) -> dict:
    data = {
        "candidate_name": "Ada Lovelace",
        "email": "ada@example.com",
        "phone": "+15550100",
        "top_skills": ["Python", "FastAPI", "MongoDB"],
        "summary": "Backend engineer with six years of Python services.",
        "match_score": 85,
        "recommended": "yes",
        "scoring_breakdown": {
            "skills_match": 90,
            "experience_match": 80,
            "role_alignment": 85,
            "education_match": 75,
        },
        "matched_skills": ["Python", "FastAPI"],
        "missing_skills": ["Kubernetes"],
        "experience_level": "Senior",
        "detailed_feedback": {
            "strengths": ["Production Python"],
            "weaknesses": ["No container orchestration"],
            "specific_gaps": ["Kubernetes"],
            "recommendations": ["Kubernetes certification"],
            "score_explanation": "Weighted from the breakdown.",
        },
    }
    data.update(overrides)
    return data


def make_report(**overrides) -> dict:
    data = {
        "overall_score": 78,
        "strengths": ["Clear explanations"],
        "weaknesses": ["Light on testing"],
        "recommended_next_step": "onsite",
        "detailed_notes": "Solid technical depth.",
    }
    data.update(overrides)
    return data


def make_assessment(**overrides) -> dict:
    data = {
        "total_score": 72,
        "category_scores": [
            {"name": "Technical Knowledge", "score": 75, "comment": "Good fundamentals"},
            {"name": "Communication Skills", "score": 80, "comment": "Clear"},
            {"name": "Problem-Solving", "score": 70, "comment": "Methodical"},
            {"name": "Cultural & Role Fit", "score": 65, "comment": "Reasonable"},
            {"name": "Confidence & Clarity", "score": 70, "comment": "Steady"},
        ],
        "strengths": ["Structured answers"],
        "areas_for_improvement": ["Go deeper on trade-offs"],
        "final_assessment": "A promising candidate.",
    }
    data.update(overrides)
    return data


class FakeLLM(LLMInterface):
    """Answers with canned JSON chosen by the requested response schema."""

    def __init__(self):
        self.calls: list[tuple[str, str]] = []
        self.responses = {
            "CandidateAnalysis": make_analysis(),
            "InterviewReport": make_report(),
            "FeedbackAssessment": make_assessment(),
        }
        self.fail_on: set[str] = set()

    @property
    def model_id(self) -> str:
        return "fake-model"

    async def generate(self, prompt, config=None):
        schema = (config or {}).get("response_schema")
        name = schema.__name__ if schema else "text"
        self.calls.append((name, prompt))
        if name in self.fail_on:
            raise RuntimeError(f"{name} backend unavailable")
        response = self.responses.get(name, {})
        if callable(response):
            response = response(prompt)
        content = response if isinstance(response, str) else json.dumps(response)
        return LLMResponse(
            content=content,
            usage_metadata={"prompt_tokens": 100, "completion_tokens": 50, "total_tokens": 150},
        )


# ── Fake voice backend ───────────────────────────────────────────────────

class FakeVoiceSession(VoiceSessionInterface):
    def __init__(self, turns=None, fail_start=False, fail_mid_call=False, hang=False):
        super().__init__()
        self.turns = turns if turns is not None else [
            ("assistant", "Please tell me about yourself."),
            ("user", "I build Python services."),
        ]
        self.fail_start = fail_start
        self.fail_mid_call = fail_mid_call
        self.hang = hang
        self.customer = None
        self.variables = None

    async def _open(self, customer, variables):
        if self.fail_start:
            raise RuntimeError("number unreachable")
        self.customer = customer
        self.variables = variables
        return "fake-call-1"

    async def _run(self):
        for role, content in self.turns:
            await self._deliver_message(role, content)
        if self.fail_mid_call:
            raise RuntimeError("line dropped")
        if self.hang:
            await asyncio.Event().wait()
        self.recording_url = "https://recordings.example/fake-call-1.mp3"


class FakeVoiceFactory:
    def __init__(self, **session_kwargs):
        self.session_kwargs = session_kwargs
        self.sessions: list[FakeVoiceSession] = []

    @property
    def available(self) -> bool:
        return True

    def create_session(self):
        session = FakeVoiceSession(**self.session_kwargs)
        self.sessions.append(session)
        return session


# ── Fixtures ─────────────────────────────────────────────────────────────

@pytest.fixture
def settings():
    return get_settings()


@pytest.fixture
def smtp_outbox(monkeypatch, settings):
    """Replaces the SMTP client; every delivered message lands in the returned list."""
    outbox = []

    class RecordingSMTP:
        def __init__(self, host, port, timeout=None):
            self.host = host
            self.port = port

        def __enter__(self):
            return self

        def __exit__(self, *exc_info):
            return False

        def starttls(self):
            pass

        def login(self, user, password):
            pass

        def sendmail(self, sender, recipient, message):
            outbox.append(email.message_from_string(message))

    monkeypatch.setattr(smtplib, "SMTP", RecordingSMTP)
    monkeypatch.setattr(settings, "SMTP_HOST", "smtp.example.com")
    monkeypatch.setattr(settings, "SMTP_PORT", 587)
    monkeypatch.setattr(settings, "SMTP_USER", "recruiting@example.com")
    monkeypatch.setattr(settings, "SMTP_PASSWORD", "secret")
    monkeypatch.setattr(settings, "ADMIN_EMAIL", "hr@example.com")
    return outbox


def message_html(message) -> str:
    part = message.get_payload()[0]
    return part.get_payload(decode=True).decode(part.get_content_charset() or "utf-8")


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def voice_factory():
    return FakeVoiceFactory()


@pytest.fixture
def app(fake_db, fake_llm, voice_factory):
    from main import app as fastapi_app

    fastapi_app.state.db_client = fake_db
    fastapi_app.state.generation_client = fake_llm
    fastapi_app.state.voice_session_factory = voice_factory
    fastapi_app.state.capabilities = Capabilities(
        store=True, generation=True, voice=True, email=False, webhook_verification=True
    )
    return fastapi_app


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as async_client:
        yield async_client


def build_candidate(run_id: str = "run-1", shortlisted: bool = True, created_at: str = None,
                    **analysis_overrides) -> Candidate:
    analysis = CandidateAnalysis(**make_analysis(**analysis_overrides))
    fields = {
        "run_id": run_id,
        "file_name": "ada.pdf",
        "text_snippet": "Ada Lovelace - Backend engineer",
        "ai": analysis,
        "email": analysis.email.lower() if analysis.email else None,
        "shortlisted": shortlisted,
    }
    if created_at:
        fields["created_at"] = created_at
    return Candidate(**fields)

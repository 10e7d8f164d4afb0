"""Shared fixtures: a fake Groq client, sample payloads and in-memory PDFs."""

import copy
import json
import os
import tempfile
from io import BytesIO
from types import SimpleNamespace

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

# Keep audit/app logs out of the working tree; must be set before app modules import.
os.environ.setdefault("CAREER_OPTIMIZER_LOG_DIR", tempfile.mkdtemp(prefix="career_optimizer_logs_"))

SAMPLE_DRAFT = {
    "suggestedSkills": [
        {"name": "Kubernetes", "category": "Infrastructure"},
        {"name": "Team Leadership", "category": "Leadership"},
        {"name": "Python", "category": "Technical"},
    ],
    "cvSections": {
        "professionalSummary": "Backend engineer with 7 years building payment APIs.",
        "coreCompetencies": ["Python", "PostgreSQL", "AWS"],
        "keyProjects": [
            {"title": "Ledger Rewrite", "description": "Moved settlement to event sourcing."},
        ],
        "experience": [
            {"role": "Senior Engineer, PayCo", "bulletPoints": ["Cut p99 latency by 40%.", "Mentored 3 engineers."]},
        ],
    },
    "cta": "[UI_BUTTON: DESIGN_WITH_CANVA]",
    "canvaLogic": "A minimal template keeps the focus on impact metrics.",
}

SAMPLE_GAPS = {
    "skillGaps": [
        {
            "skill": "Kubernetes",
            "suggestedCourse": "Architecting with Google Kubernetes Engine",
            "platform": "Coursera Professional Certificate",
            "reason": "All services run on Kubernetes.",
        },
        {
            "skill": "Pandas",
            "suggestedCourse": "Data Analyst with Python",
            "platform": "DataCamp Career Track",
            "reason": "Daily reporting is built in pandas.",
        },
    ],
}


class FakeGroq:
    """Stands in for groq.Groq; records every request and replies with a canned string."""

    reply = "{}"
    calls = []

    def __init__(self, api_key=None):
        self.api_key = api_key
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, **kwargs):
        FakeGroq.calls.append({"api_key": self.api_key, **kwargs})
        message = SimpleNamespace(content=FakeGroq.reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def sample_draft():
    return copy.deepcopy(SAMPLE_DRAFT)


@pytest.fixture
def sample_gaps():
    return copy.deepcopy(SAMPLE_GAPS)


@pytest.fixture
def fake_groq(monkeypatch):
    """Patch the service's Groq client. Set `fake_groq.reply` to the model's text reply."""
    from career_optimizer import web_service

    FakeGroq.calls = []
    FakeGroq.reply = "{}"
    monkeypatch.setattr(web_service, "Groq", FakeGroq)
    return FakeGroq


@pytest.fixture
def reply_json(fake_groq):
    def _set(data):
        fake_groq.reply = json.dumps(data)
    return _set


def make_pdf(lines: list[str]) -> bytes:
    buffer = BytesIO()
    doc = canvas.Canvas(buffer, pagesize=letter)
    doc.line(72, 740, 540, 740)
    y = 720
    for line in lines:
        doc.drawString(72, y, line)
        y -= 18
    doc.save()
    return buffer.getvalue()


@pytest.fixture
def cv_pdf_bytes():
    return make_pdf(["Jane Doe", "Senior Python Engineer", "Built Flask APIs on AWS Lambda"])


@pytest.fixture
def blank_pdf_bytes():
    return make_pdf([])

"""Web app service layer - Groq prompt construction, JSON contract and reply parsing."""

import json
import logging
import os
import re
from pathlib import Path

import jsonschema
from groq import Groq

from career_optimizer.courses import normalize_skill_gaps
from career_optimizer.cv_input import resolve_cv_text
from career_optimizer.errors import MissingAPIKeyError, ModelResponseError
from career_optimizer.validation import (
    CV_DRAFT,
    SKILL_GAPS,
    schema_prompt,
    validate_cv_draft,
    validate_skill_gaps,
)

MODEL = os.environ.get("GROQ_MODEL", "llama-3.3-70b-versatile")  # Exported for audit logging
TEMPERATURE = float(os.environ.get("CAREER_OPTIMIZER_TEMPERATURE", "0.4"))

PROMPTS_DIR = Path(__file__).resolve().parent / "prompts"

log = logging.getLogger("career_optimizer.web_service")

_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)

# --- MOCK DATA (used when use_mock is set; no network access) ---
MOCK_GENERATOR_RESPONSE = {
    "suggestedSkills": [
        {"name": "Stakeholder Management", "category": "Leadership"},
        {"name": "Design Systems", "category": "Technical"},
        {"name": "OKR Planning", "category": "Strategy"},
        {"name": "User Research", "category": "Product"},
        {"name": "Accessibility (WCAG)", "category": "Technical"},
    ],
    "cvSections": {
        "professionalSummary": (
            "Product designer with 8 years of experience shipping B2B platforms, "
            "leading cross-functional teams and turning research into measurable outcomes."
        ),
        "coreCompetencies": ["Interaction Design", "Prototyping", "Team Leadership", "Figma"],
        "keyProjects": [
            {"title": "Unified Design System", "description": "Consolidated 4 component libraries into one, cutting UI defects by 35%."},
            {"title": "Onboarding Redesign", "description": "Reworked first-run flow, lifting activation from 41% to 58%."},
        ],
        "experience": [
            {
                "role": "Senior Product Designer, Acme Analytics",
                "bulletPoints": [
                    "Led a squad of 5 designers across 3 product lines.",
                    "Introduced quarterly usability benchmarks adopted company-wide.",
                ],
            },
        ],
    },
    "cta": "[UI_BUTTON: DESIGN_WITH_CANVA]",
    "canvaLogic": (
        "Executive design roles are judged on visual polish first. A clean two-column Canva "
        "template keeps the summary above the fold and lets the project highlights breathe."
    ),
}

MOCK_CHECKER_RESPONSE = {
    "skillGaps": [
        {
            "skill": "Kubernetes",
            "suggestedCourse": "Architecting with Google Kubernetes Engine",
            "platform": "Coursera Professional Certificate",
            "reason": "The role runs all services on Kubernetes; the CV shows no container orchestration.",
        },
        {
            "skill": "Terraform",
            "suggestedCourse": "HashiCorp Certified: Terraform Associate",
            "platform": "Udemy Best-Seller Course",
            "reason": "Infrastructure as code is listed as a must-have and is absent from the CV.",
        },
        {
            "skill": "Machine Learning Fundamentals",
            "suggestedCourse": "Machine Learning Scientist with Python",
            "platform": "DataCamp Career Track",
            "reason": "The team owns ranking models; the CV has analytics but no ML work.",
        },
        {
            "skill": "Mentoring",
            "suggestedCourse": "Coaching and Developing Employees",
            "platform": "LinkedIn Learning",
            "reason": "Mentoring junior developers is expected; no leadership evidence is given.",
        },
    ],
}


def _load_prompt(name: str) -> str:
    return (PROMPTS_DIR / f"{name}.txt").read_text(encoding="utf-8").strip()


def _render(template: str, **values: str) -> str:
    for key, value in values.items():
        template = template.replace("{{" + key + "}}", value)
    return template


def build_system_prompt(schema_name: str) -> str:
    """System prompt declaring the expected JSON response shape."""
    return _render(_load_prompt("system"), schema=schema_prompt(schema_name))


def build_generator_prompt(career_details: str, target_job: str) -> str:
    return _render(
        _load_prompt("generate_cv"),
        career_details=career_details.strip(),
        target_job=target_job.strip(),
    )


def build_checker_parts(job_description: str, cv_text: str) -> list[str]:
    """Checker request content: the instruction, then the CV as its own part."""
    instruction = _render(_load_prompt("check_cv"), job_description=job_description.strip())
    return [instruction, f"CV Text: {cv_text}"]


def _call_model(api_key: str, system_prompt: str, parts: list[str]) -> str:
    """Single Groq chat completion in JSON mode. No retry; errors propagate."""
    client = Groq(api_key=api_key)
    messages = [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": "\n\n".join(parts)},
    ]
    response = client.chat.completions.create(
        model=MODEL,
        messages=messages,
        temperature=TEMPERATURE,
        response_format={"type": "json_object"},
    )
    return (response.choices[0].message.content or "").strip()


def parse_model_json(content: str) -> dict:
    """Parse a JSON reply, tolerating a surrounding markdown code block."""
    text = _CODE_FENCE.sub("", content.strip())
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ModelResponseError(f"Model reply is not valid JSON: {e}", raw_text=content) from e
    if not isinstance(data, dict):
        raise ModelResponseError("Model reply is not a JSON object", raw_text=content)
    return data


def _require_key(api_key: str | None) -> str:
    if not api_key:
        raise MissingAPIKeyError("GROQ_API_KEY is not set. Add it to .env in the project root.")
    return api_key


def generate_cv(api_key: str | None, career_details: str, target_job: str, use_mock: bool = False) -> dict:
    """Generator mode: synthesize suggested skills and four CV sections from free text."""
    if not career_details or not career_details.strip():
        raise ValueError("Career details are required")
    if not target_job or not target_job.strip():
        raise ValueError("Target job title is required")
    if use_mock:
        return json.loads(json.dumps(MOCK_GENERATOR_RESPONSE))

    api_key = _require_key(api_key)
    content = _call_model(
        api_key,
        build_system_prompt(CV_DRAFT),
        [build_generator_prompt(career_details, target_job)],
    )
    data = parse_model_json(content)
    try:
        validate_cv_draft(data)
    except jsonschema.ValidationError as e:
        log.warning("CV draft failed schema validation: %s", e.message)
        raise ModelResponseError(f"Model reply does not match the CV draft schema: {e.message}", raw_text=content) from e
    return data


def check_cv(api_key: str | None, cv_input: dict, job_description: str, use_mock: bool = False) -> dict:
    """Checker mode: compare a CV against a job description and report skill gaps."""
    if not job_description or not job_description.strip():
        raise ValueError("Job description is required")
    cv_text = resolve_cv_text(cv_input)
    if use_mock:
        return json.loads(json.dumps(MOCK_CHECKER_RESPONSE))

    api_key = _require_key(api_key)
    content = _call_model(
        api_key,
        build_system_prompt(SKILL_GAPS),
        build_checker_parts(job_description, cv_text),
    )
    data = normalize_skill_gaps(parse_model_json(content))
    try:
        validate_skill_gaps(data)
    except jsonschema.ValidationError as e:
        log.warning("Skill gap report failed schema validation: %s", e.message)
        raise ModelResponseError(f"Model reply does not match the skill gap schema: {e.message}", raw_text=content) from e
    return data

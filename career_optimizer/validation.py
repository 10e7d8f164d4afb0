"""Schema validation for model replies (CV drafts and skill-gap reports)."""

import json
from functools import lru_cache
from pathlib import Path

import jsonschema

SCHEMAS_DIR = Path(__file__).resolve().parent / "schemas"

CV_DRAFT = "cv_draft"
SKILL_GAPS = "skill_gaps"


@lru_cache(maxsize=None)
def _read_schema(name: str) -> str:
    path = SCHEMAS_DIR / f"{name}.schema.json"
    return path.read_text(encoding="utf-8")


def load_schema(name: str) -> dict:
    """Return a fresh copy of the named schema."""
    return json.loads(_read_schema(name))


def schema_prompt(name: str) -> str:
    """Schema rendered for embedding in a system prompt (no $schema/title noise)."""
    schema = load_schema(name)
    schema.pop("$schema", None)
    schema.pop("title", None)
    return json.dumps(schema, indent=2)


def validate_cv_draft(data: dict) -> None:
    """Validate a generator reply against schema. Raises jsonschema.ValidationError if invalid."""
    jsonschema.validate(data, load_schema(CV_DRAFT))


def validate_skill_gaps(data: dict) -> None:
    """Validate a checker reply against schema. Raises jsonschema.ValidationError if invalid."""
    jsonschema.validate(data, load_schema(SKILL_GAPS))

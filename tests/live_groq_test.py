"""End-to-end checks against the real Groq API. Skipped without GROQ_API_KEY."""

import os

import pytest

from career_optimizer.courses import PLATFORMS
from career_optimizer.web_service import check_cv, generate_cv

JD = """Senior Data Engineer. Build batch and streaming pipelines on Spark and Kafka.
Own our dbt models and Airflow DAGs. Terraform for AWS infrastructure."""

CV = """Jane Doe. Backend engineer, 6 years. Python, Flask, PostgreSQL.
Built REST APIs for a payments platform and ran nightly ETL jobs with cron."""


@pytest.mark.skipif(not os.environ.get("GROQ_API_KEY"), reason="GROQ_API_KEY not set")
def test_generate_cv_live():
    draft = generate_cv(os.environ["GROQ_API_KEY"], CV, "Senior Data Engineer")
    assert draft["suggestedSkills"]
    assert draft["cvSections"]["professionalSummary"]
    assert draft["canvaLogic"]


@pytest.mark.skipif(not os.environ.get("GROQ_API_KEY"), reason="GROQ_API_KEY not set")
def test_check_cv_live():
    result = check_cv(os.environ["GROQ_API_KEY"], {"text": CV}, JD)
    assert result["skillGaps"]
    assert all(gap["platform"] in PLATFORMS for gap in result["skillGaps"])

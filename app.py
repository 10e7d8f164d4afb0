#!/usr/bin/env python3
"""Flask web app for CareerOptimizer - CV generator and skill-gap checker."""

import os
from io import BytesIO

from dotenv import load_dotenv
from flask import Flask, jsonify, render_template, request, send_file

from career_optimizer.audit import audit_log, hash_inputs, setup_app_logging
from career_optimizer.courses import decorate_gaps, summarize_gaps
from career_optimizer.cv_draft import CANVA_TEMPLATES_URL, selected_skills
from career_optimizer.cv_input import cv_input_from_upload, resolve_cv_text
from career_optimizer.cv_pdf import render_cv_pdf
from career_optimizer.errors import CVInputError, MissingAPIKeyError, ModelResponseError
from career_optimizer.modes import parse_mode
from career_optimizer.web_service import MODEL, check_cv, generate_cv

load_dotenv()

log = setup_app_logging()

GENERATE_FAILED = "Failed to generate career strategy. Please try again."
CHECK_FAILED = "Failed to check CV gaps. Please try again."
INVALID_KEY = "Invalid or expired API key. Check GROQ_API_KEY in .env and regenerate at console.groq.com"

app = Flask(__name__)
app.config["MAX_CONTENT_LENGTH"] = int(os.environ.get("CAREER_OPTIMIZER_MAX_UPLOAD_MB", "16")) * 1024 * 1024


def _is_auth_error(err: Exception) -> bool:
    if getattr(err, "status_code", None) == 401:
        return True
    msg = str(err)
    return "Error code: 401" in msg or "Invalid API Key" in msg or "invalid_api_key" in msg


def _as_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() in ("1", "true", "yes", "on")


def _text(data, key: str) -> str:
    value = data.get(key)
    return value.strip() if isinstance(value, str) else ""


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _api_key(data) -> str:
    return _text(data, "api_key") or os.getenv("GROQ_API_KEY", "")


@app.errorhandler(413)
def request_too_large(_e):
    limit_mb = app.config["MAX_CONTENT_LENGTH"] // (1024 * 1024)
    return jsonify({"error": f"Upload too large. The limit is {limit_mb} MB."}), 413


@app.route("/")
def index():
    mode = parse_mode(request.args.get("mode"))
    return render_template("index.html", mode=mode.value, canva_url=CANVA_TEMPLATES_URL)


@app.route("/api/generate", methods=["POST"])
def api_generate():
    """Generator mode: career details + target job -> CV draft."""
    data = _json_body()
    career_details = _text(data, "career_details")
    target_job = _text(data, "target_job")
    use_mock = _as_bool(data.get("use_mock"))
    api_key = _api_key(data)

    if not career_details or not target_job:
        return jsonify({"error": "Career details and target job title are required"}), 400

    input_hash = hash_inputs(career_details, target_job)
    log.info("Generate started (api_key_set=%s, career_chars=%d)", bool(api_key), len(career_details))
    try:
        draft = generate_cv(api_key, career_details, target_job, use_mock)
    except MissingAPIKeyError as e:
        audit_log(action="generate", status="error", use_mock=use_mock, input_hash=input_hash, error=str(e))
        return jsonify({"error": str(e)}), 400
    except ModelResponseError as e:
        audit_log(action="generate", status="error", use_mock=use_mock, model=MODEL, input_hash=input_hash, error=str(e))
        log.warning("Generate failed: %s", e)
        return jsonify({"error": GENERATE_FAILED, "detail": str(e)}), 502
    except Exception as e:
        err_msg = INVALID_KEY if _is_auth_error(e) else GENERATE_FAILED
        audit_log(action="generate", status="error", use_mock=use_mock, model=MODEL, input_hash=input_hash, error=str(e))
        log.exception("Generate failed")
        return jsonify({"error": err_msg}), 500

    audit_log(
        action="generate",
        status="success",
        use_mock=use_mock,
        model=MODEL if not use_mock else "mock",
        input_hash=input_hash,
        career_char_count=len(career_details),
        num_skills=len(draft["suggestedSkills"]),
    )
    log.info("Generate complete: skills=%d", len(draft["suggestedSkills"]))
    return jsonify({**draft, "target_job": target_job, "canva_url": CANVA_TEMPLATES_URL})


def _read_check_request() -> tuple[dict, str, dict]:
    """Return (payload, job_description, cv_input) from a multipart form or a JSON body."""
    if request.files or request.form:
        form = request.form
        cv_input = cv_input_from_upload(
            form.get("cv_input_method"),
            form.get("cv_text"),
            request.files.get("cv_file"),
        )
        return form, _text(form, "job_description"), cv_input

    data = _json_body()
    cv_input = data.get("cv") or {}
    if not isinstance(cv_input, dict) or not (cv_input.get("file") or cv_input.get("text")):
        raise CVInputError("A CV is required: provide cv.text or cv.file")
    return data, _text(data, "job_description"), cv_input


@app.route("/api/check", methods=["POST"])
def api_check():
    """Checker mode: CV (text or PDF) + job description -> skill gaps with courses."""
    try:
        data, job_description, cv_input = _read_check_request()
    except CVInputError as e:
        audit_log(action="extract_cv", status="error", error=str(e))
        return jsonify({"error": str(e)}), 400

    if not job_description:
        return jsonify({"error": "Job description is required"}), 400

    use_mock = _as_bool(data.get("use_mock"))
    api_key = _api_key(data)
    cv_source = "pdf" if cv_input.get("file") else "text"

    try:
        cv_text = resolve_cv_text(cv_input)
    except CVInputError as e:
        audit_log(action="extract_cv", status="error", cv_source=cv_source, filename=cv_input.get("filename"), error=str(e))
        log.info("CV input rejected: %s", e)
        return jsonify({"error": str(e)}), 400

    input_hash = hash_inputs(cv_text, job_description)
    log.info(
        "Check started (api_key_set=%s, cv_source=%s, jd_chars=%d, cv_chars=%d)",
        bool(api_key), cv_source, len(job_description), len(cv_text),
    )
    try:
        # The resolved text is passed on so a PDF is only extracted once.
        result = check_cv(api_key, {"text": cv_text}, job_description, use_mock)
    except MissingAPIKeyError as e:
        audit_log(action="check", status="error", use_mock=use_mock, input_hash=input_hash, error=str(e))
        return jsonify({"error": str(e)}), 400
    except ModelResponseError as e:
        audit_log(action="check", status="error", use_mock=use_mock, model=MODEL, input_hash=input_hash, error=str(e))
        log.warning("Check failed: %s", e)
        return jsonify({"error": CHECK_FAILED, "detail": str(e)}), 502
    except Exception as e:
        err_msg = INVALID_KEY if _is_auth_error(e) else CHECK_FAILED
        audit_log(action="check", status="error", use_mock=use_mock, model=MODEL, input_hash=input_hash, error=str(e))
        log.exception("Check failed")
        return jsonify({"error": err_msg}), 500

    audit_log(
        action="check",
        status="success",
        use_mock=use_mock,
        model=MODEL if not use_mock else "mock",
        input_hash=input_hash,
        jd_char_count=len(job_description),
        cv_char_count=len(cv_text),
        cv_source=cv_source,
        num_gaps=len(result["skillGaps"]),
        filename=cv_input.get("filename"),
    )
    log.info("Check complete: gaps=%d", len(result["skillGaps"]))
    return jsonify({"skillGaps": decorate_gaps(result), "summary": summarize_gaps(result)})


@app.route("/api/generate/pdf", methods=["POST"])
def api_generate_pdf():
    """Export a generated draft (plus selected skills) as a PDF download."""
    data = _json_body()
    draft = data.get("draft")
    target_job = _text(data, "target_job")
    requested = data.get("selected_skills")
    selected = selected_skills(requested if isinstance(requested, list) else [])

    if not isinstance(draft, dict) or "cvSections" not in draft:
        return jsonify({"error": "A generated CV draft is required"}), 400

    try:
        pdf_bytes = render_cv_pdf(draft, target_job, selected)
    except (KeyError, TypeError) as e:
        audit_log(action="export_pdf", status="error", error=f"Malformed draft: {e}")
        return jsonify({"error": "The CV draft is incomplete and cannot be exported"}), 400

    slug = "_".join(target_job.split()) or "CV"
    filename = f"{slug}_CV_Draft.pdf"
    audit_log(
        action="export_pdf",
        status="success",
        filename=filename,
        num_skills=len(selected),
        extra={"pdf_bytes": len(pdf_bytes)},
    )
    log.info("Exported CV draft PDF: %s (%d bytes)", filename, len(pdf_bytes))
    return send_file(
        BytesIO(pdf_bytes),
        mimetype="application/pdf",
        as_attachment=True,
        download_name=filename,
    )


if __name__ == "__main__":
    api_key_set = bool(os.getenv("GROQ_API_KEY", "").strip())
    log.info(
        "CareerOptimizer starting on http://127.0.0.1:5000 | GROQ_API_KEY set: %s | model: %s",
        api_key_set,
        MODEL,
    )
    if not api_key_set:
        log.warning("GROQ_API_KEY not found in .env - generation and checks will fail until it is set")
    app.run(debug=True, port=5000)

"""Audit trail for model runs and API operations."""

import hashlib
import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path

AUDIT_DIR = Path(
    os.environ.get("CAREER_OPTIMIZER_LOG_DIR")
    or Path(__file__).resolve().parent.parent / "logs"
)
AUDIT_FILE = AUDIT_DIR / "audit.log"
APP_LOG_FILE = AUDIT_DIR / "app.log"

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _ensure_log_dir():
    AUDIT_DIR.mkdir(parents=True, exist_ok=True)


def _iso_ts():
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def hash_inputs(*parts: str) -> str:
    """SHA-256 over the request inputs, so audit entries can be correlated without storing CV or JD text."""
    return hashlib.sha256("\n".join(parts).encode("utf-8")).hexdigest()


def audit_log(
    action: str,
    status: str,
    *,
    use_mock: bool = False,
    model: str | None = None,
    input_hash: str | None = None,
    career_char_count: int | None = None,
    jd_char_count: int | None = None,
    cv_char_count: int | None = None,
    cv_source: str | None = None,
    num_skills: int | None = None,
    num_gaps: int | None = None,
    filename: str | None = None,
    error: str | None = None,
    extra: dict | None = None,
):
    """Append a structured audit entry to the audit log (JSONL). Never records raw CV/JD text."""
    _ensure_log_dir()
    entry = {
        "timestamp": _iso_ts(),
        "action": action,
        "status": status,
        "use_mock": use_mock,
    }
    if model:
        entry["model"] = model
    if input_hash:
        entry["input_hash"] = input_hash
    if career_char_count is not None:
        entry["career_char_count"] = career_char_count
    if jd_char_count is not None:
        entry["jd_char_count"] = jd_char_count
    if cv_char_count is not None:
        entry["cv_char_count"] = cv_char_count
    if cv_source:
        entry["cv_source"] = cv_source
    if num_skills is not None:
        entry["num_skills"] = num_skills
    if num_gaps is not None:
        entry["num_gaps"] = num_gaps
    if filename:
        entry["filename"] = filename
    if error:
        entry["error"] = error
    if extra:
        entry.update(extra)

    with open(AUDIT_FILE, "a", encoding="utf-8") as f:
        f.write(json.dumps(entry, default=str) + "\n")


def _add_handler(logger: logging.Logger, handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
    logger.addHandler(handler)


def setup_app_logging(console_level: str | None = None) -> logging.Logger:
    """Configure the `career_optimizer` logger: console at CAREER_OPTIMIZER_LOG_LEVEL, app.log at DEBUG.

    Safe to call more than once; handlers are only attached the first time.
    """
    logger = logging.getLogger("career_optimizer")
    if logger.handlers:
        return logger
    _ensure_log_dir()
    logger.setLevel(logging.DEBUG)

    level_name = (console_level or os.environ.get("CAREER_OPTIMIZER_LOG_LEVEL") or "INFO").upper()
    _add_handler(logger, logging.StreamHandler(), getattr(logging, level_name, logging.INFO))
    _add_handler(logger, logging.FileHandler(APP_LOG_FILE, encoding="utf-8"), logging.DEBUG)

    # The Groq client logs every HTTP request through httpx at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    return logger

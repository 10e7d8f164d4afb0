"""CV input marshalling: pasted text or an uploaded PDF, turned into request text."""

import base64
import binascii

from pypdf.errors import PdfReadError

from career_optimizer.errors import CVInputError
from career_optimizer.pdf_parser import extract_text_from_pdf

PDF_MIME_TYPE = "application/pdf"
PDF_MAGIC = b"%PDF-"

METHOD_PDF = "pdf"
METHOD_TEXT = "text"

MSG_PASTE_TEXT = "Please paste your CV text."
MSG_UPLOAD_PDF = "Please upload a PDF CV."
MSG_INVALID_PDF = "Please upload a valid PDF file."


def encode_file(raw: bytes, mime_type: str = PDF_MIME_TYPE) -> dict:
    """Wrap raw file bytes as the base64 `file` part of a CV input."""
    return {"data": base64.b64encode(raw).decode("ascii"), "mime_type": mime_type}


def cv_input_from_upload(method: str | None, text: str | None, file_storage=None) -> dict:
    """
    Build a CV input from the checker form.

    `method` is "pdf" (default) or "text". `file_storage` is the werkzeug
    upload for the PDF method. Raises CVInputError with the message the
    UI shows.
    """
    method = (method or METHOD_PDF).strip().lower()

    if method == METHOD_TEXT:
        if not text or not text.strip():
            raise CVInputError(MSG_PASTE_TEXT)
        return {"text": text.strip()}

    if file_storage is None or not file_storage.filename:
        raise CVInputError(MSG_UPLOAD_PDF)
    is_pdf = file_storage.mimetype == PDF_MIME_TYPE or file_storage.filename.lower().endswith(".pdf")
    if not is_pdf:
        raise CVInputError(MSG_INVALID_PDF)
    raw = file_storage.read()
    if not raw:
        raise CVInputError(MSG_UPLOAD_PDF)
    return {"file": encode_file(raw, PDF_MIME_TYPE), "filename": file_storage.filename}


def _decode_file(file_part: dict) -> bytes:
    mime_type = file_part.get("mime_type") or file_part.get("mimeType")
    if mime_type != PDF_MIME_TYPE:
        raise CVInputError(MSG_INVALID_PDF)
    try:
        raw = base64.b64decode(file_part.get("data") or "", validate=True)
    except (binascii.Error, TypeError, ValueError) as e:
        raise CVInputError(MSG_INVALID_PDF) from e
    if not raw.startswith(PDF_MAGIC):
        raise CVInputError(MSG_INVALID_PDF)
    return raw


def resolve_cv_text(cv_input: dict) -> str:
    """Return the CV text to send to the model. A file takes precedence over text."""
    file_part = cv_input.get("file")
    if file_part:
        if not isinstance(file_part, dict):
            raise CVInputError(MSG_INVALID_PDF)
        raw = _decode_file(file_part)
        try:
            text = extract_text_from_pdf(raw)
        except PdfReadError as e:
            raise CVInputError(MSG_INVALID_PDF) from e
        if not text:
            raise CVInputError(
                "No text could be extracted from the PDF. It may be scanned; paste the CV text instead."
            )
        return text

    text = cv_input.get("text") or ""
    if not isinstance(text, str) or not text.strip():
        raise CVInputError(MSG_PASTE_TEXT)
    return text.strip()

"""CV marshalling: form uploads, base64 file parts and PDF text extraction."""

import base64
from io import BytesIO

import pytest
from werkzeug.datastructures import FileStorage

from career_optimizer.cv_input import (
    MSG_INVALID_PDF,
    MSG_PASTE_TEXT,
    MSG_UPLOAD_PDF,
    cv_input_from_upload,
    encode_file,
    resolve_cv_text,
)
from career_optimizer.errors import CVInputError
from career_optimizer.pdf_parser import extract_text_from_pdf


def _upload(data: bytes, filename: str, content_type: str) -> FileStorage:
    return FileStorage(stream=BytesIO(data), filename=filename, content_type=content_type)


def test_text_method_returns_stripped_text():
    assert cv_input_from_upload("text", "  Jane Doe  ", None) == {"text": "Jane Doe"}


def test_text_method_blank_text_rejected():
    with pytest.raises(CVInputError, match=MSG_PASTE_TEXT):
        cv_input_from_upload("text", "   ", None)


def test_pdf_is_default_method_and_requires_file():
    with pytest.raises(CVInputError, match=MSG_UPLOAD_PDF):
        cv_input_from_upload(None, "pasted text is ignored", None)


def test_pdf_method_empty_filename_rejected():
    with pytest.raises(CVInputError, match=MSG_UPLOAD_PDF):
        cv_input_from_upload("pdf", None, _upload(b"", "", "application/octet-stream"))


def test_non_pdf_upload_rejected():
    with pytest.raises(CVInputError, match=MSG_INVALID_PDF):
        cv_input_from_upload("pdf", None, _upload(b"hello", "cv.docx", "application/msword"))


def test_pdf_upload_encoded_as_base64(cv_pdf_bytes):
    cv_input = cv_input_from_upload("PDF", None, _upload(cv_pdf_bytes, "cv.pdf", "application/pdf"))
    assert cv_input["filename"] == "cv.pdf"
    assert cv_input["file"]["mime_type"] == "application/pdf"
    assert base64.b64decode(cv_input["file"]["data"]) == cv_pdf_bytes


def test_resolve_text_input():
    assert resolve_cv_text({"text": " Jane \n"}) == "Jane"


def test_resolve_empty_input_rejected():
    with pytest.raises(CVInputError, match=MSG_PASTE_TEXT):
        resolve_cv_text({})


def test_resolve_file_extracts_pdf_text(cv_pdf_bytes):
    text = resolve_cv_text({"file": encode_file(cv_pdf_bytes)})
    assert "Jane Doe" in text
    assert "Senior Python Engineer" in text


def test_resolve_accepts_camel_case_mime_type(cv_pdf_bytes):
    part = {"data": base64.b64encode(cv_pdf_bytes).decode(), "mimeType": "application/pdf"}
    assert "Jane Doe" in resolve_cv_text({"file": part})


def test_resolve_file_wins_over_text(cv_pdf_bytes):
    text = resolve_cv_text({"file": encode_file(cv_pdf_bytes), "text": "pasted"})
    assert "pasted" not in text


def test_resolve_wrong_mime_type_rejected(cv_pdf_bytes):
    with pytest.raises(CVInputError, match=MSG_INVALID_PDF):
        resolve_cv_text({"file": encode_file(cv_pdf_bytes, "image/png")})


def test_resolve_bad_base64_rejected():
    with pytest.raises(CVInputError, match=MSG_INVALID_PDF):
        resolve_cv_text({"file": {"data": "%%% not base64 %%%", "mime_type": "application/pdf"}})


def test_resolve_non_pdf_bytes_rejected():
    with pytest.raises(CVInputError, match=MSG_INVALID_PDF):
        resolve_cv_text({"file": encode_file(b"PK\x03\x04 zip archive")})


def test_resolve_scanned_pdf_without_text_rejected(blank_pdf_bytes):
    with pytest.raises(CVInputError, match="No text could be extracted"):
        resolve_cv_text({"file": encode_file(blank_pdf_bytes)})


def test_extract_text_from_pdf_path(tmp_path, cv_pdf_bytes):
    path = tmp_path / "cv.pdf"
    path.write_bytes(cv_pdf_bytes)
    assert "Built Flask APIs on AWS Lambda" in extract_text_from_pdf(path)


def test_extract_text_from_pdf_missing_path(tmp_path):
    with pytest.raises(FileNotFoundError):
        extract_text_from_pdf(tmp_path / "missing.pdf")


@pytest.mark.parametrize("file_part", ["abc", ["application/pdf"], 42])
def test_resolve_file_part_must_be_object(file_part):
    with pytest.raises(CVInputError, match=MSG_INVALID_PDF):
        resolve_cv_text({"file": file_part})


def test_resolve_non_string_base64_rejected():
    with pytest.raises(CVInputError, match=MSG_INVALID_PDF):
        resolve_cv_text({"file": {"data": 12345, "mime_type": "application/pdf"}})


def test_resolve_non_string_text_rejected():
    with pytest.raises(CVInputError, match=MSG_PASTE_TEXT):
        resolve_cv_text({"text": ["Jane", "Doe"]})

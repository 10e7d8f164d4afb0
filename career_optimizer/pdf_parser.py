"""PDF text extraction for uploaded CVs."""

from io import BytesIO
from pathlib import Path

from pypdf import PdfReader


def extract_text_from_pdf(source: str | Path | bytes) -> str:
    """
    Extract text from a CV PDF.

    Args:
        source: Path to the PDF file, or the raw PDF bytes from an upload.

    Returns:
        Page texts joined by blank lines. Empty string if nothing is extractable.

    Note:
        Scanned PDFs (image-only) will return minimal or empty text.
    """
    if isinstance(source, (bytes, bytearray)):
        reader = PdfReader(BytesIO(source))
    else:
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"PDF not found: {path}")
        reader = PdfReader(path)

    text_parts = []
    for page in reader.pages:
        page_text = page.extract_text()
        if page_text:
            text_parts.append(page_text)

    return "\n\n".join(text_parts).strip()

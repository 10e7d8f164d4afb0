"""PDF export of a generated CV draft."""

import re
from io import BytesIO

from reportlab.lib.colors import HexColor, black
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import inch
from reportlab.pdfgen import canvas

from career_optimizer.cv_draft import draft_to_markdown

ACCENT = HexColor("#4f46e5")
TEXT_DARK = HexColor("#0f172a")
TEXT_BODY = HexColor("#475569")

LINE_HEIGHT = 14
BULLET_INDENT = 16
SECTION_SPACING = 18


def _clean_text(text: str) -> str:
    """Strip markdown markers (leading hashes, bold, links)."""
    text = re.sub(r"^#+\s*", "", text)
    text = re.sub(r"\*\*", "", text)
    text = re.sub(r"\[(.*?)\]\(.*?\)", r"\1", text)
    return text.strip()


def render_cv_pdf(draft: dict, target_job: str, selected=()) -> bytes:
    """Render the draft (with any selected skills merged into Expertise) to PDF bytes."""
    return render_markdown_pdf(draft_to_markdown(draft, target_job, selected))


def render_markdown_pdf(markdown: str) -> bytes:
    buffer = BytesIO()
    doc = canvas.Canvas(buffer, pagesize=A4)
    doc.setTitle("CV Draft")
    page_width, page_height = A4
    margin = 0.75 * inch
    content_width = page_width - (margin * 2)
    cursor_y = page_height - margin

    def check_page_break(needed_height: float = 20) -> None:
        nonlocal cursor_y
        if cursor_y - needed_height < margin:
            doc.showPage()
            cursor_y = page_height - margin

    def split_lines(text: str, font: str, size: int, max_width: float) -> list[str]:
        words = text.split()
        lines = []
        current = []
        for w in words:
            test = " ".join(current + [w])
            if doc.stringWidth(test, font, size) <= max_width:
                current.append(w)
            else:
                if current:
                    lines.append(" ".join(current))
                current = [w]
        if current:
            lines.append(" ".join(current))
        return lines if lines else [text]

    def draw_wrapped(text: str, font: str, size: int, color, x: float, width: float) -> None:
        nonlocal cursor_y
        doc.setFont(font, size)
        doc.setFillColor(color)
        for w in split_lines(text, font, size, width):
            check_page_break(LINE_HEIGHT)
            doc.drawString(x, cursor_y, w)
            cursor_y -= LINE_HEIGHT

    after_name = False
    for line in markdown.split("\n"):
        line = line.strip()
        if not line:
            continue

        # Name
        if line.startswith("# "):
            check_page_break(50)
            doc.setFillColor(ACCENT)
            doc.rect(0, page_height - 8, page_width, 8, stroke=0, fill=1)
            doc.setFont("Helvetica-Bold", 24)
            doc.setFillColor(TEXT_DARK)
            doc.drawString(margin, cursor_y, _clean_text(line).upper()[:60])
            cursor_y -= LINE_HEIGHT + 6
            after_name = True
            continue

        # Target job line directly under the name
        if after_name:
            after_name = False
            if not line.startswith("#"):
                doc.setFont("Helvetica-Bold", 10)
                doc.setFillColor(ACCENT)
                doc.drawString(margin, cursor_y, line[:90])
                cursor_y -= SECTION_SPACING + 6
                continue

        if line.startswith("## "):
            check_page_break(45)
            cursor_y -= 6
            doc.setFont("Helvetica-Bold", 11)
            doc.setFillColor(TEXT_DARK)
            doc.drawString(margin, cursor_y, _clean_text(line).upper()[:120])
            cursor_y -= 4
            doc.setStrokeColor(black)
            doc.setLineWidth(0.4)
            doc.line(margin, cursor_y, page_width - margin, cursor_y)
            cursor_y -= SECTION_SPACING

        elif re.match(r"^#{3,}\s", line):
            check_page_break(28)
            cursor_y -= 2
            draw_wrapped(_clean_text(line), "Helvetica-Bold", 11, TEXT_DARK, margin, content_width)
            cursor_y -= 2

        elif line.startswith("- ") or line.startswith("* "):
            wrapped = split_lines(_clean_text(line[2:]), "Helvetica", 10, content_width - BULLET_INDENT)
            check_page_break(len(wrapped) * LINE_HEIGHT + 4)
            doc.setFont("Helvetica", 10)
            doc.setFillColor(ACCENT)
            doc.drawString(margin + 4, cursor_y, "•")
            doc.setFillColor(TEXT_BODY)
            for w in wrapped:
                doc.drawString(margin + BULLET_INDENT, cursor_y, w)
                cursor_y -= LINE_HEIGHT
            cursor_y -= 2

        elif re.match(r"^\*\*.*?\*\*:", line):
            m = re.match(r"^\*\*(.*?)\*\*:(.*)", line)
            check_page_break(2 * LINE_HEIGHT)
            draw_wrapped(m.group(1), "Helvetica-Bold", 10, TEXT_DARK, margin, content_width)
            draw_wrapped(_clean_text(m.group(2)), "Helvetica", 9, TEXT_BODY, margin, content_width)
            cursor_y -= 4

        else:
            draw_wrapped(_clean_text(line), "Helvetica", 10, TEXT_BODY, margin, content_width)
            cursor_y -= 4

    doc.save()
    buffer.seek(0)
    return buffer.getvalue()

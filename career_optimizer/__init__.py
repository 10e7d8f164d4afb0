"""CareerOptimizer - CV draft generation and skill-gap checking using Groq AI."""

from career_optimizer.modes import AppMode
from career_optimizer.pdf_parser import extract_text_from_pdf
from career_optimizer.web_service import check_cv, generate_cv
from career_optimizer.cv_pdf import render_cv_pdf

__all__ = ["AppMode", "extract_text_from_pdf", "check_cv", "generate_cv", "render_cv_pdf"]

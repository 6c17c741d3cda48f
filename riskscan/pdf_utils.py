"""PDF text extraction (PyMuPDF)."""

from __future__ import annotations

import fitz  # type: ignore


def extract_pdf_text(payload: bytes) -> str:
    """Return the text layer of every page, joined by newlines."""
    if not payload:
        return ""
    with fitz.open(stream=payload, filetype="pdf") as doc:
        return "\n".join(page.get_text() for page in doc)

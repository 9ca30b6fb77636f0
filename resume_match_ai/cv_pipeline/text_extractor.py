"""Extract raw text from uploaded résumé files (PDF, DOCX, TXT). In-memory only."""

from io import BytesIO
from pathlib import Path
from typing import Optional

import pdfplumber
from docx import Document

from resume_match_ai.config import MAX_TEXT_CHARS, SUPPORTED_EXTENSIONS, SUPPORTED_MIME_TYPES
from resume_match_ai.utils.logger import get_logger

logger = get_logger(__name__)


def detect_format(filename: str, mime_type: Optional[str] = None) -> Optional[str]:
    """'pdf', 'docx' or 'txt' from the declared MIME type, else from the file extension."""
    if mime_type:
        fmt = SUPPORTED_MIME_TYPES.get(mime_type.split(";")[0].strip().lower())
        if fmt:
            return fmt
    return SUPPORTED_EXTENSIONS.get(Path(filename or "").suffix.lower())


def _extract_pdf(bytes_io: BytesIO) -> str:
    """Extract text from PDF using pdfplumber."""
    try:
        with pdfplumber.open(bytes_io) as pdf:
            parts = []
            for page in pdf.pages:
                ptext = page.extract_text()
                if ptext:
                    parts.append(ptext)
            return "\n\n".join(parts)
    except Exception as e:
        logger.exception("PDF extraction failed: %s", e)
        return ""


def _extract_docx(bytes_io: BytesIO) -> str:
    """Extract paragraph and table text from DOCX using python-docx."""
    try:
        doc = Document(bytes_io)
        parts = [p.text for p in doc.paragraphs if p.text.strip()]
        for table in doc.tables:
            for row in table.rows:
                cells = [c.text.strip() for c in row.cells if c.text.strip()]
                if cells:
                    parts.append(" | ".join(dict.fromkeys(cells)))
        return "\n".join(parts)
    except Exception as e:
        logger.exception("DOCX extraction failed: %s", e)
        return ""


def _extract_txt(file_bytes: bytes) -> str:
    return file_bytes.decode("utf-8", errors="replace").lstrip("\ufeff")


def extract_text_from_file(file_bytes: bytes, filename: str, mime_type: Optional[str] = None) -> str:
    """
    Extract raw text from an uploaded résumé file.
    File is read from bytes in memory; no disk write.
    Returns empty string for unsupported types or when extraction fails.
    """
    if not file_bytes:
        return ""
    fmt = detect_format(filename, mime_type)
    if fmt is None:
        logger.warning("Unsupported file type: %s (%s)", filename, mime_type)
        return ""

    if fmt == "pdf":
        raw = _extract_pdf(BytesIO(file_bytes))
    elif fmt == "docx":
        raw = _extract_docx(BytesIO(file_bytes))
    else:
        raw = _extract_txt(file_bytes)

    if len(raw) > MAX_TEXT_CHARS:
        logger.info("Truncating %s from %s to %s characters", filename, len(raw), MAX_TEXT_CHARS)
        raw = raw[:MAX_TEXT_CHARS]
    return raw

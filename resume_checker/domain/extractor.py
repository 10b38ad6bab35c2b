"""Plain-text extraction from uploaded resume documents."""

from __future__ import annotations

import asyncio
import logging
import threading
from pathlib import Path
from typing import Optional, Union

from ..errors import ExtractionFailure, UnsupportedType

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"
DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
SUPPORTED_MEDIA_TYPES = frozenset({PDF_MEDIA_TYPE, DOCX_MEDIA_TYPE})

# PyMuPDF must not be used from several threads at once
_PDF_LOCK = threading.Lock()


def is_supported_media_type(media_type: Optional[str]) -> bool:
    return normalize_media_type(media_type) in SUPPORTED_MEDIA_TYPES


def normalize_media_type(media_type: Optional[str]) -> str:
    """Drop parameters (``; charset=...``) and case from a content type."""
    if not media_type:
        return ""
    return media_type.split(";", 1)[0].strip().lower()


def extract_text(path: Union[str, Path], media_type: Optional[str]) -> str:
    """Extract plain text from a PDF or DOCX file.

    The file at ``path`` is only read; its owner is responsible for removing it.

    Raises:
        UnsupportedType: media type is neither PDF nor DOCX.
        ExtractionFailure: the extraction library could not decode the file.
    """
    kind = normalize_media_type(media_type)
    if kind == PDF_MEDIA_TYPE:
        parse = _parse_pdf
    elif kind == DOCX_MEDIA_TYPE:
        parse = _parse_docx
    else:
        raise UnsupportedType(media_type)

    logger.info("Extracting text from %s (%s)", path, kind)
    try:
        return parse(Path(path))
    except Exception as e:
        raise ExtractionFailure(f"Could not extract text from {kind} document: {e}") from e


async def extract_text_async(path: Union[str, Path], media_type: Optional[str]) -> str:
    """Run ``extract_text`` in a worker thread."""
    return await asyncio.to_thread(extract_text, path, media_type)


def _parse_pdf(path: Path) -> str:
    """Parse PDF file using PyMuPDF."""
    import fitz  # PyMuPDF

    with _PDF_LOCK, fitz.open(path) as doc:
        return "\n".join(page.get_text() for page in doc)


def _parse_docx(path: Path) -> str:
    """Parse DOCX file using python-docx."""
    from docx import Document

    doc = Document(str(path))
    text_parts = [para.text for para in doc.paragraphs if para.text.strip()]

    # Also extract from tables
    for table in doc.tables:
        for row in table.rows:
            row_text = "\t".join(cell.text.strip() for cell in row.cells if cell.text.strip())
            if row_text:
                text_parts.append(row_text)

    return "\n".join(text_parts)

"""Turn an uploaded résumé payload into plain text.

Supports PDF (via pypdf), DOCX (via stdlib zipfile) and TXT. Everything runs
on the in-memory payload; nothing is written to disk.
"""
from __future__ import annotations

import io
import re
import zipfile
from pathlib import PurePath
from xml.etree import ElementTree

from pypdf import PdfReader

from jobagent.errors import EmptyInput, ExtractionFailure, UnsupportedFormat
from jobagent.log import get_logger

log = get_logger(__name__)

_DOCX_NS = "{http://schemas.openxmlformats.org/wordprocessingml/2006/main}"


def extract_text(payload: bytes, filename: str, size: int | None = None) -> str:
    """Return plain text for a PDF, DOCX or TXT payload.

    *size* is the size the caller declared for the upload and defaults to
    the payload length. Raises :class:`EmptyInput` for a zero-size upload,
    :class:`UnsupportedFormat` for other extensions and
    :class:`ExtractionFailure` when the bytes cannot be decoded.
    """
    declared = len(payload or b"") if size is None else size
    if not payload or declared == 0:
        raise EmptyInput()

    suffix = PurePath(filename or "").suffix.lower()
    if suffix == ".pdf":
        text = _extract_pdf(payload)
    elif suffix == ".docx":
        text = _extract_docx(payload)
    elif suffix == ".txt":
        text = payload.decode("utf-8", errors="replace")
    else:
        raise UnsupportedFormat(suffix)

    if not text.strip():
        raise ExtractionFailure(f"Could not extract any text from {filename}.")
    log.info("Extracted %d characters from %s", len(text), filename)
    return text


def _fix_spacing(text: str) -> str:
    """Re-insert spaces when PDF extraction merges words together.

    Only kicks in when the space-to-character ratio is abnormally low.
    """
    if not text or len(text) < 50:
        return text
    space_ratio = text.count(" ") / len(text)
    if space_ratio > 0.08:
        return text

    log.debug("Low space ratio (%.2f%%) — applying spacing fix", space_ratio * 100)
    fixed = re.sub(r"([a-z])([A-Z])", r"\1 \2", text)
    fixed = re.sub(r"([a-zA-Z])(\d)", r"\1 \2", fixed)
    fixed = re.sub(r"(\d)([a-zA-Z])", r"\1 \2", fixed)
    fixed = re.sub(r"([!?,;:])([A-Za-z])", r"\1 \2", fixed)
    return fixed


def _extract_pdf(payload: bytes) -> str:
    try:
        reader = PdfReader(io.BytesIO(payload))
        pages = [_fix_spacing(page.extract_text() or "") for page in reader.pages]
    except Exception as exc:
        raise ExtractionFailure(f"Could not read the PDF file: {exc}") from exc
    return "\n".join(pages)


def _extract_docx(payload: bytes) -> str:
    """One line per ``w:p`` paragraph of ``word/document.xml``."""
    lines: list[str] = []
    try:
        with zipfile.ZipFile(io.BytesIO(payload)) as zf:
            with zf.open("word/document.xml") as f:
                tree = ElementTree.parse(f)
    except (zipfile.BadZipFile, KeyError, ElementTree.ParseError) as exc:
        raise ExtractionFailure(f"Could not read the DOCX file: {exc}") from exc

    for para in tree.iter(f"{_DOCX_NS}p"):
        parts = [node.text for node in para.iter(f"{_DOCX_NS}t") if node.text]
        if parts:
            lines.append("".join(parts))
    return "\n".join(lines)

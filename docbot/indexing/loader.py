"""
Knowledge-base loader: read PDF and text files into Documents.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Callable, Dict, List

from pypdf import PdfReader

from docbot.config import settings
from docbot.vector_store.document import Document

DOCUMENTS_DIR = settings.documents_dir
SOURCE_TYPE_FILES = "files"
MIN_DOCUMENT_CHARS = 10  # shorter extractions are treated as empty (scanned PDFs etc.)

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F-\x9F]")

logger = logging.getLogger(__name__)


def clean_text(text: str) -> str:
    if not text:
        return ""
    text = _CONTROL_CHARS.sub("", text)
    text = text.replace("\ufffd", "")
    text = re.sub(r"\s+", " ", text)
    return text.strip()


def read_pdf(path: Path) -> str:
    reader = PdfReader(str(path))
    pages: List[str] = []
    for page in reader.pages:
        text = page.extract_text() or ""
        if text:
            pages.append(text)
    return "\n".join(pages)


def read_text_file(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")


READERS: Dict[str, Callable[[Path], str]] = {
    ".pdf": read_pdf,
    ".txt": read_text_file,
    ".md": read_text_file,
}


def load_file(path: Path) -> Document | None:
    reader = READERS.get(path.suffix.lower())
    if reader is None:
        return None

    raw = reader(path)
    text = clean_text(raw)
    logger.info("Read file", extra={"file": path.name, "raw_chars": len(raw), "clean_chars": len(text)})
    if len(text) < MIN_DOCUMENT_CHARS:
        logger.warning("Skipping file with insufficient content", extra={"file": path.name})
        return None

    return Document(
        content=text,
        source_type=SOURCE_TYPE_FILES,
        source_name=path.name,
        metadata={"path": str(path)},
    )


def load_documents(directory: str | Path = DOCUMENTS_DIR) -> List[Document]:
    base = Path(directory)
    if not base.exists():
        logger.warning("Documents directory not found", extra={"directory": str(base)})
        return []

    documents: List[Document] = []
    for path in sorted(p for p in base.rglob("*") if p.is_file()):
        doc = load_file(path)
        if doc is not None:
            documents.append(doc)
    return documents


__all__ = ["clean_text", "read_pdf", "read_text_file", "load_file", "load_documents", "DOCUMENTS_DIR", "READERS"]

"""Load uploaded PDF, DOCX and TXT resumes into plain text."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from io import BytesIO
from pathlib import PurePath
from typing import Callable, Dict, List, Optional, Protocol

from docx import Document
from pypdf import PdfReader

from .errors import DocumentTooLargeError, ExtractionError, UnsupportedFormatError

logger = logging.getLogger(__name__)


SUPPORTED_KINDS = ("pdf", "docx", "txt")

EXTENSION_KINDS = {
    ".pdf": "pdf",
    ".docx": "docx",
    ".doc": "docx",
    ".txt": "txt",
    ".text": "txt",
    ".md": "txt",
}

MIME_KINDS = {
    "application/pdf": "pdf",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
    "application/msword": "docx",
    "text/plain": "txt",
    "text/markdown": "txt",
}

DEFAULT_MAX_BYTES = 5 * 1024 * 1024


@dataclass(frozen=True)
class RawDocument:
    """Uploaded bytes plus their resolved media kind."""

    data: bytes
    kind: str
    filename: str = ""

    @classmethod
    def from_upload(
        cls,
        data: bytes,
        filename: Optional[str] = None,
        content_type: Optional[str] = None,
    ) -> "RawDocument":
        return cls(data=data, kind=resolve_kind(filename, content_type), filename=filename or "")


class TextExtractor(Protocol):
    """Anything that turns a `RawDocument` into text."""

    def extract(self, document: RawDocument) -> str:
        ...


def resolve_kind(filename: Optional[str] = None, content_type: Optional[str] = None) -> str:
    """Resolve pdf/docx/txt from a MIME type, falling back to the file extension."""
    mime = (content_type or "").split(";")[0].strip().lower()
    if mime in MIME_KINDS:
        return MIME_KINDS[mime]
    if "word" in mime:
        return "docx"

    suffix = PurePath(filename).suffix.lower() if filename else ""
    if suffix in EXTENSION_KINDS:
        return EXTENSION_KINDS[suffix]

    raise UnsupportedFormatError(suffix.lstrip(".") or mime or "unknown", SUPPORTED_KINDS)


class DocumentLoader:
    """Extracts plain text from `RawDocument` entries."""

    def __init__(self, max_bytes: Optional[int] = DEFAULT_MAX_BYTES) -> None:
        self.max_bytes = max_bytes
        self._readers: Dict[str, Callable[[bytes], str]] = {
            "pdf": self._load_pdf,
            "docx": self._load_docx,
            "txt": self._load_text,
        }

    def extract(self, document: RawDocument) -> str:
        if document.kind not in self._readers:
            raise UnsupportedFormatError(document.kind, SUPPORTED_KINDS)
        if self.max_bytes is not None and len(document.data) > self.max_bytes:
            raise DocumentTooLargeError(len(document.data), self.max_bytes)

        try:
            text = self._readers[document.kind](document.data)
        except Exception as exc:
            raise ExtractionError(document.kind, exc) from exc

        logger.debug(
            "Extracted %d characters from %s document %r",
            len(text), document.kind, document.filename,
        )
        return text

    def _load_pdf(self, data: bytes) -> str:
        reader = PdfReader(BytesIO(data))
        pages: List[str] = []
        for page in reader.pages:
            text = page.extract_text() or ""
            if text.strip():
                pages.append(text)
        return "\n".join(pages)

    def _load_docx(self, data: bytes) -> str:
        document = Document(BytesIO(data))
        lines = [paragraph.text for paragraph in document.paragraphs]
        for table in document.tables:
            for row in table.rows:
                cells: List[str] = []
                for cell in row.cells:
                    # Merged cells repeat the same text across the row
                    if cell.text.strip() and cell.text not in cells:
                        cells.append(cell.text)
                if cells:
                    lines.append(" | ".join(cells))
        return "\n".join(lines)

    def _load_text(self, data: bytes) -> str:
        return data.decode("utf-8-sig")


def extract_text(
    data: bytes,
    filename: Optional[str] = None,
    content_type: Optional[str] = None,
    max_bytes: Optional[int] = DEFAULT_MAX_BYTES,
) -> str:
    """Convenience function to extract text from uploaded bytes."""
    document = RawDocument.from_upload(data, filename, content_type)
    return DocumentLoader(max_bytes=max_bytes).extract(document)

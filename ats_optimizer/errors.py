"""
Error types raised by the resume optimizer pipeline.
Every failure is per-request; callers decide how to present it.
"""

from typing import Optional


class ResumeProcessingError(Exception):
    """Base exception for all pipeline failures."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class UnsupportedFormatError(ResumeProcessingError):
    """File type or requested output format is not pdf, docx or txt."""

    def __init__(self, fmt: str, supported=("pdf", "docx", "txt")):
        self.format = fmt
        super().__init__(
            f"Unsupported format: {fmt!r} (expected one of {', '.join(supported)})",
            details={"format": fmt, "supported": list(supported)},
        )


class ExtractionError(ResumeProcessingError):
    """The underlying PDF/DOCX/text decoder failed."""

    def __init__(self, kind: str, cause: BaseException):
        self.kind = kind
        self.cause = cause
        super().__init__(
            f"Failed to extract text from {kind} document: {cause}",
            details={"kind": kind, "cause": type(cause).__name__},
        )


class EmptyOutputError(ResumeProcessingError):
    """Non-empty input produced an empty or whitespace-only result."""

    def __init__(self, stage: str):
        self.stage = stage
        super().__init__(f"{stage} produced no output", details={"stage": stage})


class DocumentTooLargeError(ResumeProcessingError):
    """Uploaded document exceeds the configured size limit."""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(
            f"Document is {size} bytes, limit is {limit} bytes",
            details={"size": size, "limit": limit},
        )

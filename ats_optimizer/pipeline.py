"""
Resume optimizer pipeline.
Runs extraction, section parsing, keyword extraction, optimization and scoring
for one uploaded resume, and renders the result for download.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .analyzer import parse_sections, render_sections
from .config import Settings
from .errors import EmptyOutputError
from .extractor import KeywordProfile, extract_keyword_profile
from .generator import DocumentWriter, get_writer
from .loader import DocumentLoader, RawDocument, TextExtractor
from .matcher import ATSScorer, MatchResult
from .optimizer import ContentOptimizer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessedResult:
    """Outcome of one upload-and-process cycle."""
    content: str
    keywords: List[str]
    score: int
    optimized_content: str
    match: MatchResult = field(default_factory=MatchResult, compare=False)
    injected: Counter = field(default_factory=Counter, compare=False)
    profile: KeywordProfile = field(default_factory=KeywordProfile, compare=False)


class ResumePipeline:
    """Wire the extractor, parser, optimizer, scorer and writers together."""

    def __init__(
        self,
        extractor: Optional[TextExtractor] = None,
        writers: Optional[Dict[str, DocumentWriter]] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or Settings()
        self.extractor = extractor or DocumentLoader(max_bytes=self.settings.max_upload_bytes)
        self.writers = dict(writers or {})

    def process(
        self,
        data: bytes,
        filename: Optional[str] = None,
        job_description: str = "",
        content_type: Optional[str] = None,
    ) -> ProcessedResult:
        """Extract, optimize and score an uploaded resume."""
        document = RawDocument.from_upload(data, filename, content_type)
        text = self.extractor.extract(document)
        return self.process_text(text, job_description)

    def process_text(self, text: str, job_description: str = "") -> ProcessedResult:
        """Optimize and score already-extracted resume text."""
        if not text.strip():
            logger.warning("No text extracted from resume")

        profile = extract_keyword_profile(job_description)
        sections = parse_sections(text)
        logger.info(
            "Parsed %d sections, %d keywords from job description",
            len(sections), len(profile),
        )

        optimizer = ContentOptimizer(profile)
        optimized = optimizer.optimize(sections)
        match = ATSScorer(profile).match(optimized)
        logger.info("ATS score %d%%", match.score)

        return ProcessedResult(
            content=render_sections(sections),
            keywords=list(profile),
            score=match.score,
            optimized_content=optimized,
            match=match,
            injected=optimizer.injected,
            profile=profile,
        )

    def export(self, text: str, fmt: str) -> bytes:
        """Render text as a downloadable pdf, docx or txt document."""
        writer = self.writers.get(fmt) or get_writer(fmt)
        data = writer.write(text)
        if text.strip() and not data:
            raise EmptyOutputError(f"{fmt} renderer")
        return data


def process_resume(
    data: bytes,
    filename: Optional[str] = None,
    job_description: str = "",
    content_type: Optional[str] = None,
) -> ProcessedResult:
    """Convenience function to process one uploaded resume."""
    pipeline = ResumePipeline()
    return pipeline.process(data, filename, job_description, content_type)


def export_resume(text: str, fmt: str) -> bytes:
    """Convenience function to render resume text for download."""
    return ResumePipeline().export(text, fmt)

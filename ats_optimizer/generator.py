"""
Resume document generator.
Renders optimized resume text as plain text, PDF or DOCX, and writes the
markdown match report.
"""

import re
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from io import BytesIO
from typing import Dict, List, Optional, Protocol

from docx import Document
from docx.shared import Inches, Pt
from reportlab.lib.pagesizes import LETTER
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from .analyzer import BULLET, strip_control_chars
from .errors import UnsupportedFormatError
from .extractor import KeywordClass, KeywordProfile
from .matcher import MatchResult


SUPPORTED_FORMATS = ("pdf", "docx", "txt")

MEDIA_TYPES = {
    "pdf": "application/pdf",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "txt": "text/plain",
}

# Sections are separated by one or more blank lines
SECTION_SPLIT = re.compile(r'\n\s*\n')


class LineKind(Enum):
    HEADER = "header"
    BULLET = "bullet"
    BODY = "body"


def classify_line(line: str) -> LineKind:
    """Classify a line as header (all caps), bullet ('• ' prefix) or body."""
    stripped = line.strip()
    if stripped.startswith(BULLET):
        return LineKind.BULLET
    if stripped.isupper():
        return LineKind.HEADER
    return LineKind.BODY


def split_sections(text: str) -> List[List[str]]:
    """Split text into blank-line-delimited sections of lines."""
    sections = []
    for block in SECTION_SPLIT.split(text.strip("\n")):
        lines = block.split("\n")
        if any(line.strip() for line in lines):
            sections.append(lines)
    return sections


def download_filename(fmt: str) -> str:
    return f"optimized-resume.{fmt}"


@dataclass
class RenderConfig:
    """Configuration for page layout and spacing."""
    font_name: str = "Helvetica"
    bold_font_name: str = "Helvetica-Bold"
    header_font_size: float = 16
    body_font_size: float = 12
    margin: float = 56.0
    line_height: float = 16.0
    section_spacing: float = 16.0
    bullet_indent: float = 14.0
    docx_font_name: str = "Arial"
    docx_font_size: float = 12
    docx_bullet_indent: float = 0.25
    docx_header_space_after: float = 10
    docx_body_space_after: float = 5
    docx_section_space_before: float = 12
    docx_line_spacing: float = 1.5
    text_encoding: str = "utf-8"


class DocumentWriter(Protocol):
    """Turns resume text into downloadable bytes."""

    def write(self, text: str) -> bytes:
        ...


class TextDocumentWriter:
    """Plain text output, returned verbatim."""

    def __init__(self, config: Optional[RenderConfig] = None):
        self.config = config or RenderConfig()

    def write(self, text: str) -> bytes:
        return text.encode(self.config.text_encoding)


@dataclass
class PlacedLine:
    """A line of text positioned on a PDF page."""
    page: int
    x: float
    y: float
    text: str
    font: str
    size: float
    kind: LineKind


class PdfDocumentWriter:
    """Page-based PDF output drawn on a reportlab canvas."""

    def __init__(self, config: Optional[RenderConfig] = None, page_size=LETTER):
        self.config = config or RenderConfig()
        self.page_size = page_size

    def layout(self, text: str) -> List[PlacedLine]:
        """Position every wrapped line, moving down by fixed increments."""
        cfg = self.config
        width, height = self.page_size
        top = height - cfg.margin
        page, y = 1, top
        placed: List[PlacedLine] = []

        for section in split_sections(text):
            for line in section:
                if not line.strip():
                    continue
                kind = classify_line(line)
                if kind is LineKind.HEADER:
                    font, size, x = cfg.bold_font_name, cfg.header_font_size, cfg.margin
                elif kind is LineKind.BULLET:
                    font, size, x = cfg.font_name, cfg.body_font_size, cfg.margin + cfg.bullet_indent
                else:
                    font, size, x = cfg.font_name, cfg.body_font_size, cfg.margin

                max_width = width - cfg.margin - x
                for fragment in simpleSplit(line.strip(), font, size, max_width) or [""]:
                    if y < cfg.margin:
                        page, y = page + 1, top
                    placed.append(PlacedLine(page, x, y, fragment, font, size, kind))
                    y -= cfg.line_height
            y -= cfg.section_spacing

        return placed

    def write(self, text: str) -> bytes:
        buffer = BytesIO()
        pdf = canvas.Canvas(buffer, pagesize=self.page_size)
        pdf.setTitle("Optimized Resume")

        page = 1
        for placed in self.layout(text):
            if placed.page != page:
                pdf.showPage()
                page = placed.page
            pdf.setFont(placed.font, placed.size)
            pdf.drawString(placed.x, placed.y, placed.text)

        pdf.save()
        return buffer.getvalue()


class DocxDocumentWriter:
    """Structured word-processor output via python-docx."""

    def __init__(self, config: Optional[RenderConfig] = None):
        self.config = config or RenderConfig()

    def write(self, text: str) -> bytes:
        cfg = self.config
        document = Document()

        # python-docx rejects NUL and other control characters
        for index, section in enumerate(split_sections(strip_control_chars(text))):
            first_paragraph = None
            for line in section:
                if not line.strip():
                    continue
                paragraph = self._add_line(document, line)
                if first_paragraph is None:
                    first_paragraph = paragraph
            if index > 0 and first_paragraph is not None:
                first_paragraph.paragraph_format.space_before = Pt(cfg.docx_section_space_before)

        buffer = BytesIO()
        document.save(buffer)
        return buffer.getvalue()

    def _add_line(self, document, line: str):
        cfg = self.config
        kind = classify_line(line)

        if kind is LineKind.HEADER:
            paragraph = document.add_heading(line.strip(), level=1)
            paragraph.paragraph_format.space_after = Pt(cfg.docx_header_space_after)
        else:
            paragraph = document.add_paragraph()
            run = paragraph.add_run(line.strip())
            run.font.name = cfg.docx_font_name
            run.font.size = Pt(cfg.docx_font_size)
            paragraph.paragraph_format.space_after = Pt(cfg.docx_body_space_after)
            if kind is LineKind.BULLET:
                paragraph.paragraph_format.left_indent = Inches(cfg.docx_bullet_indent)

        paragraph.paragraph_format.line_spacing = cfg.docx_line_spacing
        return paragraph


WRITERS = {
    "pdf": PdfDocumentWriter,
    "docx": DocxDocumentWriter,
    "txt": TextDocumentWriter,
}


def get_writer(fmt: str, config: Optional[RenderConfig] = None) -> DocumentWriter:
    if fmt not in WRITERS:
        raise UnsupportedFormatError(fmt, SUPPORTED_FORMATS)
    return WRITERS[fmt](config)


def render(text: str, fmt: str, config: Optional[RenderConfig] = None) -> bytes:
    """Render resume text as pdf, docx or txt bytes."""
    return get_writer(fmt, config).write(text)


class MatchReportGenerator:
    """Generate match report for the optimized resume."""

    def __init__(
        self,
        keywords: KeywordProfile,
        match_result: MatchResult,
        injected: Optional[Counter] = None,
    ):
        self.keywords = keywords
        self.result = match_result
        self.injected = injected or Counter()

    def generate(self) -> str:
        """Generate markdown match report."""
        lines = ["# Resume Match Report", ""]

        score = self.result.score
        lines.append(f"## ATS Score: {score}%")
        lines.append("")

        filled = int(score / 10)
        bar = "█" * filled + "░" * (10 - filled)
        lines.append(f"**Match Score:** [{bar}] {score}%")
        lines.append(f"**Keyword Coverage:** {self.result.keyword_coverage * 100:.1f}%")
        lines.append("")

        lines.append("## ✓ Matched Keywords")
        lines.append("")
        if self.result.matched_keywords:
            for keyword_class, names in self._group(self.result.matched_keywords).items():
                lines.append(f"**{keyword_class.value.title()}:** {', '.join(names)}")
        else:
            lines.append("_No keywords matched_")
        lines.append("")

        if self.result.partial_keywords:
            lines.append("## ~ Partially Matched")
            lines.append("")
            lines.append(', '.join(self.result.partial_keywords))
            lines.append("")

        lines.append("## ✗ Missing Keywords")
        lines.append("")
        if self.result.missing_keywords:
            for keyword_class, names in self._group(self.result.missing_keywords).items():
                lines.append(f"**{keyword_class.value.title()}:** {', '.join(names[:10])}")
        else:
            lines.append("_All keywords matched!_")
        lines.append("")

        if self.injected:
            lines.append("## Keywords Added by Optimizer")
            lines.append("")
            for keyword, count in self.injected.most_common():
                lines.append(f"- {keyword} ({count}x)")
            lines.append("")

        if self.result.recommendations:
            lines.append("## Recommendations")
            lines.append("")
            for rec in self.result.recommendations:
                lines.append(f"- {rec}")
            lines.append("")

        lines.append("---")
        lines.append("*Generated by ATS Resume Optimizer*")

        return "\n".join(lines)

    def _group(self, keywords: List[str]) -> Dict[KeywordClass, List[str]]:
        grouped: Dict[KeywordClass, List[str]] = {}
        for keyword_class in KeywordClass:
            names = [k for k in keywords if self.keywords.class_of(k) is keyword_class]
            if names:
                grouped[keyword_class] = names
        return grouped

"""
ATS Resume Optimizer

A tool that takes a PDF, DOCX or plain-text resume and a job description,
injects missing keywords into the resume, scores the ATS keyword match and
renders the result as a downloadable document.
"""

from .errors import (
    ResumeProcessingError,
    UnsupportedFormatError,
    ExtractionError,
    EmptyOutputError,
    DocumentTooLargeError,
)
from .loader import extract_text, RawDocument, DocumentLoader
from .extractor import extract_keywords, KeywordProfile, KeywordClass, JobDescriptionExtractor
from .analyzer import parse_sections, Section, SectionType, ResumeSectionParser
from .optimizer import optimize, ContentOptimizer
from .matcher import calculate_ats_score, ATSScorer, MatchResult
from .generator import render, MatchReportGenerator, RenderConfig
from .pipeline import process_resume, export_resume, ProcessedResult, ResumePipeline

__version__ = "1.0.0"
__all__ = [
    "extract_text",
    "extract_keywords",
    "parse_sections",
    "optimize",
    "calculate_ats_score",
    "render",
    "process_resume",
    "export_resume",
    "RawDocument",
    "KeywordProfile",
    "KeywordClass",
    "Section",
    "SectionType",
    "MatchResult",
    "ProcessedResult",
    "RenderConfig",
    "DocumentLoader",
    "JobDescriptionExtractor",
    "ResumeSectionParser",
    "ContentOptimizer",
    "ATSScorer",
    "MatchReportGenerator",
    "ResumePipeline",
    "ResumeProcessingError",
    "UnsupportedFormatError",
    "ExtractionError",
    "EmptyOutputError",
    "DocumentTooLargeError",
]

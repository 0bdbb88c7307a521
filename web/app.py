"""
FastAPI web application for the ATS Resume Optimizer.
Upload a resume with a job description, get back the optimized text and score,
then export it as PDF, DOCX or TXT.
"""

import asyncio
import logging
import traceback
from typing import List

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response
from pydantic import BaseModel

from ats_optimizer import __version__
from ats_optimizer.config import Settings
from ats_optimizer.errors import (
    DocumentTooLargeError,
    EmptyOutputError,
    ExtractionError,
    ResumeProcessingError,
    UnsupportedFormatError,
)
from ats_optimizer.generator import MEDIA_TYPES, download_filename
from ats_optimizer.matcher import match_keywords
from ats_optimizer.extractor import extract_keyword_profile
from ats_optimizer.pipeline import ProcessedResult, ResumePipeline

logger = logging.getLogger(__name__)

app = FastAPI(title="ATS Resume Optimizer", version=__version__)

settings = Settings.from_env()
pipeline = ResumePipeline(settings=settings)


# === Models ===

class ProcessResponse(BaseModel):
    content: str
    keywords: List[str]
    score: int
    optimized_content: str
    matched_keywords: List[str]
    missing_keywords: List[str]
    recommendations: List[str]

    @classmethod
    def from_result(cls, result: ProcessedResult) -> "ProcessResponse":
        return cls(
            content=result.content,
            keywords=result.keywords,
            score=result.score,
            optimized_content=result.optimized_content,
            matched_keywords=result.match.matched_keywords,
            missing_keywords=result.match.missing_keywords,
            recommendations=result.match.recommendations,
        )


class ScoreResponse(BaseModel):
    score: int
    keyword_coverage: float
    matched_keywords: List[str]
    partial_keywords: List[str]
    missing_keywords: List[str]
    recommendations: List[str]


def _http_error(exc: ResumeProcessingError) -> HTTPException:
    """Map pipeline errors to HTTP status codes."""
    if isinstance(exc, UnsupportedFormatError):
        return HTTPException(status_code=415, detail=exc.message)
    if isinstance(exc, DocumentTooLargeError):
        return HTTPException(status_code=413, detail=exc.message)
    if isinstance(exc, ExtractionError):
        return HTTPException(status_code=422, detail="Failed to process resume. Please try again.")
    if isinstance(exc, EmptyOutputError):
        return HTTPException(status_code=500, detail=exc.message)
    return HTTPException(status_code=400, detail=exc.message)


# === Routes ===

@app.get("/api/health")
async def health_check():
    return {
        "status": "healthy",
        "version": __version__,
        "formats": sorted(MEDIA_TYPES),
        "max_upload_bytes": settings.max_upload_bytes,
    }


@app.post("/api/process", response_model=ProcessResponse)
async def process_resume(file: UploadFile = File(...), job_description: str = Form("")):
    """Extract, optimize and score an uploaded resume."""
    limit = pipeline.settings.max_upload_bytes
    # Read at most one byte past the limit
    data = await file.read(limit + 1) if limit else await file.read()
    if limit and len(data) > limit:
        error = DocumentTooLargeError(file.size or len(data), limit)
        logger.warning("Rejected %r: %s", file.filename, error)
        raise _http_error(error)

    try:
        result = await asyncio.wait_for(
            run_in_threadpool(
                pipeline.process,
                data,
                file.filename,
                job_description,
                file.content_type,
            ),
            timeout=settings.process_timeout,
        )
    except asyncio.TimeoutError:
        # The worker thread keeps running; only the request is released
        logger.error("Processing %r timed out after %.0fs", file.filename, settings.process_timeout)
        raise HTTPException(status_code=504, detail="Resume processing timed out")
    except ResumeProcessingError as e:
        logger.warning("Processing %r failed: %s", file.filename, e)
        raise _http_error(e)
    except Exception as e:
        traceback.print_exc()
        raise HTTPException(status_code=500, detail=str(e))

    return ProcessResponse.from_result(result)


@app.post("/api/score", response_model=ScoreResponse)
async def score_resume(content: str = Form(...), job_description: str = Form("")):
    """Score edited resume text without rewriting it."""
    match = match_keywords(content, extract_keyword_profile(job_description))
    return ScoreResponse(
        score=match.score,
        keyword_coverage=round(match.keyword_coverage * 100, 1),
        matched_keywords=match.matched_keywords,
        partial_keywords=match.partial_keywords,
        missing_keywords=match.missing_keywords,
        recommendations=match.recommendations,
    )


@app.post("/api/export/{fmt}")
async def export_resume(fmt: str, content: str = Form(...)):
    """Export optimized resume text as a downloadable document."""
    try:
        data = await run_in_threadpool(pipeline.export, content, fmt)
    except UnsupportedFormatError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except ResumeProcessingError as e:
        raise _http_error(e)
    except Exception as e:
        traceback.print_exc()
        raise HTTPException(status_code=500, detail=str(e))

    return Response(
        content=data,
        media_type=MEDIA_TYPES[fmt],
        headers={"Content-Disposition": f"attachment; filename={download_filename(fmt)}"}
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)

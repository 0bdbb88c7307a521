import pytest
from fastapi.testclient import TestClient

import web.app as web_app
from ats_optimizer.config import Settings
from ats_optimizer.pipeline import ResumePipeline


@pytest.fixture
def client():
    return TestClient(web_app.app)


def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["formats"] == ["docx", "pdf", "txt"]


def test_process_txt_upload(client, sample_resume, sample_job):
    response = client.post(
        "/api/process",
        files={"file": ("resume.txt", sample_resume.encode("utf-8"), "text/plain")},
        data={"job_description": sample_job},
    )

    assert response.status_code == 200
    body = response.json()
    assert 0 <= body["score"] <= 100
    assert "python" in body["keywords"]
    assert body["optimized_content"].startswith("OTHER\nJane Doe")
    assert set(body) >= {"content", "keywords", "score", "optimized_content"}


def test_process_unsupported_type(client):
    response = client.post(
        "/api/process",
        files={"file": ("photo.png", b"\x89PNG", "image/png")},
    )

    assert response.status_code == 415


def test_process_corrupt_pdf(client):
    response = client.post(
        "/api/process",
        files={"file": ("resume.pdf", b"not a pdf", "application/pdf")},
    )

    assert response.status_code == 422
    assert response.json()["detail"] == "Failed to process resume. Please try again."


def test_process_too_large(client, monkeypatch):
    monkeypatch.setattr(web_app, "pipeline", ResumePipeline(settings=Settings(max_upload_bytes=8)))

    response = client.post(
        "/api/process",
        files={"file": ("resume.txt", b"0123456789", "text/plain")},
    )

    assert response.status_code == 413
    assert "limit is 8 bytes" in response.json()["detail"]


def test_export_txt(client):
    text = "EXPERIENCE\n• did X\n"

    response = client.post("/api/export/txt", data={"content": text})

    assert response.status_code == 200
    assert response.content == text.encode("utf-8")
    assert response.headers["content-type"].startswith("text/plain")
    assert "optimized-resume.txt" in response.headers["content-disposition"]


@pytest.mark.parametrize("fmt,magic", [("pdf", b"%PDF"), ("docx", b"PK")])
def test_export_binary_formats(client, fmt, magic):
    response = client.post(f"/api/export/{fmt}", data={"content": "EXPERIENCE\n• did X"})

    assert response.status_code == 200
    assert response.content.startswith(magic)
    assert f"optimized-resume.{fmt}" in response.headers["content-disposition"]


def test_export_unsupported_format(client):
    response = client.post("/api/export/html", data={"content": "EXPERIENCE"})

    assert response.status_code == 400


def test_score(client):
    response = client.post(
        "/api/score",
        data={"content": "Python developer", "job_description": "Python"},
    )

    assert response.status_code == 200
    body = response.json()
    assert "python" in body["matched_keywords"]
    assert 0 <= body["score"] <= 100


class RecordingExtractor:
    def __init__(self):
        self.documents = []

    def extract(self, document):
        self.documents.append(document)
        return document.data.decode("utf-8")


def test_oversized_upload_is_rejected_before_extraction(client, monkeypatch):
    extractor = RecordingExtractor()
    monkeypatch.setattr(
        web_app, "pipeline",
        ResumePipeline(extractor=extractor, settings=Settings(max_upload_bytes=8)),
    )

    response = client.post(
        "/api/process",
        files={"file": ("resume.txt", b"x" * 4096, "text/plain")},
    )

    assert response.status_code == 413
    assert extractor.documents == []


def test_upload_at_the_limit_is_processed(client, monkeypatch):
    extractor = RecordingExtractor()
    monkeypatch.setattr(
        web_app, "pipeline",
        ResumePipeline(extractor=extractor, settings=Settings(max_upload_bytes=8)),
    )

    response = client.post(
        "/api/process",
        files={"file": ("resume.txt", b"SKILLS\nx", "text/plain")},
    )

    assert response.status_code == 200
    assert extractor.documents[0].data == b"SKILLS\nx"

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from ventureai.documents import DocumentStorage
from ventureai.services import VentureAIService

pytestmark = [pytest.mark.api]


@pytest.fixture
def api():
    from ventureai.api.main import app

    with TestClient(app) as client:
        yield client


def test_register_and_list_documents(api):
    body = {
        "id": "doc_1",
        "name": "Pitch deck",
        "fileUrl": "/uploads/v9/pitch.pdf",
        "fileSize": 2048,
        "fileType": "application/pdf",
    }

    created = api.post("/api/v1/ventures/v9/documents", json=body)
    listed = api.get("/api/v1/ventures/v9/documents")

    assert created.status_code == 201
    assert created.json()["file_url"] == "/uploads/v9/pitch.pdf"
    assert [doc["id"] for doc in listed.json()] == ["doc_1"]
    assert api.get("/api/v1/ventures/other/documents").json() == []


def test_unresolvable_document_does_not_break_chat(api, settings):
    state = api.app.state
    state.venture_ai = VentureAIService(
        settings=settings,
        client=None,
        conversations=state.conversations,
        documents=state.documents,
        storage=DocumentStorage(settings.uploads_root),
    )
    api.post(
        "/api/v1/ventures/v10/documents",
        json={"id": "doc_nul", "name": "Broken", "fileUrl": "uploads/a\u0000b.txt", "fileType": "text/plain"},
    )

    response = api.post(
        "/api/v1/ventures/v10/ai/chat",
        json={"profile": {"name": "GreenCart"}, "messages": [{"role": "user", "content": "Hi"}]},
    )

    assert response.status_code == 200
    assert response.json()["isFallback"] is True

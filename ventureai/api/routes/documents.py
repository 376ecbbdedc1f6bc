"""
Venture Document Endpoints

Registers metadata for files already written under the uploads root so they
can ground generation. Uploading the bytes themselves is handled elsewhere.
"""

import structlog
from fastapi import APIRouter, Request

from ventureai.api.schemas import DocumentRegistration, DocumentResponse
from ventureai.documents import Document

router = APIRouter(prefix="/ventures/{venture_id}/documents")
logger = structlog.get_logger()


def _to_response(document: Document) -> DocumentResponse:
    return DocumentResponse(
        id=document.id,
        name=document.display_name,
        file_url=document.storage_reference,
        file_size=document.byte_size,
        file_type=document.mime_type,
        created_at=document.created_at,
    )


@router.post("", response_model=DocumentResponse, status_code=201)
async def register_document(venture_id: str, body: DocumentRegistration, request: Request):
    document = Document(
        id=body.id,
        display_name=body.name,
        storage_reference=body.file_url,
        byte_size=body.file_size,
        mime_type=body.file_type,
    )
    request.app.state.documents.add(venture_id, document)
    logger.info("Document registered", venture_id=venture_id, document_id=document.id, mime_type=document.mime_type)
    return _to_response(document)


@router.get("", response_model=list[DocumentResponse])
async def list_documents(venture_id: str, request: Request):
    """Documents used for grounding, most recent first."""
    settings = request.app.state.settings
    documents = request.app.state.documents.list_for(venture_id, settings.max_context_documents)
    return [_to_response(doc) for doc in documents]

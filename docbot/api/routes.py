from __future__ import annotations

import logging

from fastapi import APIRouter, Header, HTTPException, status

from docbot.config import settings
from docbot.embeddings.client import EmbeddingsClient
from docbot.indexing.pipeline import ReindexService
from docbot.llm.client import LLMClient
from docbot.models.schemas import (
    AskRequest,
    AskResponse,
    DeleteSourceRequest,
    DeleteSourceResponse,
    ReindexRequest,
    ReindexResponse,
)
from docbot.rag.pipeline import RAGService
from docbot.vector_store import get_vector_store

router = APIRouter()
logger = logging.getLogger(__name__)


def _check_admin_token(x_admin_token: str | None) -> None:
    if not settings.admin_token:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Admin token is not configured",
        )
    if x_admin_token != settings.admin_token.get_secret_value():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")


@router.post("/admin/reindex", response_model=ReindexResponse, summary="Reindex knowledge base")
def admin_reindex(
    reindex_request: ReindexRequest,
    x_admin_token: str | None = Header(default=None, alias="X-Admin-Token"),
) -> ReindexResponse:
    _check_admin_token(x_admin_token)

    service = ReindexService(
        get_vector_store(),
        EmbeddingsClient(),
        documents_dir=reindex_request.documents_dir or settings.documents_dir,
    )
    logger.info("Admin reindex requested", extra={"documents_dir": service.documents_dir})

    summary = service.run()

    return ReindexResponse(
        status="completed",
        documents=summary.documents,
        chunks=summary.chunks,
        failed_embeddings=summary.failed_embeddings,
        elapsed_sec=round(summary.elapsed_sec, 2),
    )


@router.post("/admin/delete-source", response_model=DeleteSourceResponse, summary="Delete all documents of a source")
def admin_delete_source(
    request: DeleteSourceRequest,
    x_admin_token: str | None = Header(default=None, alias="X-Admin-Token"),
) -> DeleteSourceResponse:
    _check_admin_token(x_admin_token)

    removed = get_vector_store().delete_by_source(request.source_type, request.source_name)
    logger.info("Admin delete-source", extra={"source_type": request.source_type, "source_name": request.source_name, "removed": removed})
    return DeleteSourceResponse(removed=removed)


@router.post("/api/v1/ask", response_model=AskResponse, summary="Ask a question about the documents")
def ask(request: AskRequest) -> AskResponse:
    question = (request.question or "").strip()
    if not question:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Question must not be empty")

    logger.info("Ask request", extra={"len": len(question), "history": len(request.history)})
    service = RAGService(
        vector_store=get_vector_store(),
        embeddings_client=EmbeddingsClient(),
        llm_client=LLMClient(),
    )
    return service.answer_question(request)


__all__ = ["router"]

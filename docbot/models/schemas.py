from __future__ import annotations

from typing import Any, Dict, List, Literal

from pydantic import BaseModel, Field


# Admin
class ReindexRequest(BaseModel):
    """Reindex the knowledge-base directory."""

    documents_dir: str | None = Field(default=None, description="Override DOCUMENTS_DIR")


class ReindexResponse(BaseModel):
    status: Literal["completed"] = Field(default="completed")
    documents: int = Field(..., ge=0, description="Files loaded")
    chunks: int = Field(..., ge=0, description="Chunks written to the store")
    failed_embeddings: int = Field(0, ge=0)
    elapsed_sec: float | None = Field(None, ge=0)


class DeleteSourceRequest(BaseModel):
    source_type: str = Field(..., min_length=1)
    source_name: str = Field(..., min_length=1)


class DeleteSourceResponse(BaseModel):
    status: Literal["deleted"] = Field(default="deleted")
    removed: int = Field(..., ge=0)


# Chat
class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class AskRequest(BaseModel):
    question: str = Field(..., min_length=1, description="User question")
    history: List[ChatMessage] = Field(default_factory=list, description="Previous turns, oldest first")
    top_k: int | None = Field(default=None, gt=0, description="Override TOP_K for this request")


class SourceRef(BaseModel):
    id: str
    source_type: str
    source_name: str
    score: float | None = None
    metadata: Dict[str, Any] = Field(default_factory=dict)


class AskResponse(BaseModel):
    answer: str
    can_answer: bool
    sources: List[SourceRef]


__all__ = [
    "ReindexRequest",
    "ReindexResponse",
    "DeleteSourceRequest",
    "DeleteSourceResponse",
    "ChatMessage",
    "AskRequest",
    "SourceRef",
    "AskResponse",
]

"""
RAG pipeline: normalize question, retrieve context, answer with the LLM.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from docbot.config import settings
from docbot.embeddings.client import EmbeddingsClient
from docbot.llm.client import LLMClient
from docbot.models.schemas import AskRequest, AskResponse, ChatMessage, SourceRef
from docbot.vector_store.base import VectorStore
from docbot.vector_store.document import Document

logger = logging.getLogger(__name__)

DEFAULT_REFUSAL = "I could not find information about this in the loaded documents."

SYSTEM_PROMPT = (
    "You are a helpful assistant answering questions about the user's document collection. "
    "Answer only from the context below. If the context does not contain the answer, say: "
    f'"{DEFAULT_REFUSAL}" '
    "Do not invent facts. Mention the source file when it helps the user."
)


class RAGService:
    """Retrieval-augmented answering over a VectorStore."""

    def __init__(
        self,
        vector_store: VectorStore,
        embeddings_client: EmbeddingsClient,
        llm_client: LLMClient,
        logger_: logging.Logger | None = None,
    ) -> None:
        self.vector_store = vector_store
        self.embeddings_client = embeddings_client
        self.llm_client = llm_client
        self.logger = logger_ or logging.getLogger(__name__)

    # --- Public API ---
    def answer_question(self, request: AskRequest) -> AskResponse:
        question = self.normalize_question(request.question)
        documents = self.retrieve(question, top_k=request.top_k)

        if self._should_refuse(documents):
            self.logger.info("Refusing before LLM", extra={"reason": "low_relevance", "retrieved": len(documents)})
            return self._refusal_response()

        messages = [{"role": m.role, "content": m.content} for m in request.history]
        messages.append({"role": "user", "content": question})
        answer = self.llm_client.chat(messages, system_prompt=self._build_system_prompt(documents))

        return AskResponse(
            answer=answer or DEFAULT_REFUSAL,
            can_answer=bool(answer),
            sources=[
                SourceRef(
                    id=doc.id,
                    source_type=doc.source_type,
                    source_name=doc.source_name,
                    score=doc.score,
                    metadata=doc.metadata,
                )
                for doc in documents
            ],
        )

    # --- Steps ---
    @staticmethod
    def normalize_question(text: str) -> str:
        return " ".join(text.strip().split())

    def retrieve(self, question: str, top_k: int | None = None) -> List[Document]:
        embedding = self.embeddings_client.embed_text(question)
        if not embedding:
            # Too short to embed; nothing can be compared against it.
            return []
        documents = self.vector_store.similarity_search(embedding, top_k=top_k)
        self.logger.info(
            "Retrieved documents",
            extra={
                "requested": top_k,
                "returned": len(documents),
                "top_score": round(documents[0].score, 3) if documents and documents[0].score is not None else None,
                "results": [{"id": d.id, "source": d.source_name, "score": d.score} for d in documents],
            },
        )
        return documents

    @staticmethod
    def _should_refuse(documents: Sequence[Document]) -> bool:
        if not documents:
            return True
        best = max((d.score or 0.0) for d in documents)
        return best < settings.relevance_threshold

    @staticmethod
    def _build_system_prompt(documents: Sequence[Document]) -> str:
        fragments: List[str] = []
        for idx, doc in enumerate(documents, start=1):
            fragments.append(f"[Fragment {idx}] Source: {doc.source_name}\n{doc.content}")
        return "\n\n".join([SYSTEM_PROMPT, "# Context", *fragments])

    @staticmethod
    def _refusal_response() -> AskResponse:
        return AskResponse(answer=DEFAULT_REFUSAL, can_answer=False, sources=[])


class ChatSession:
    """Keeps the running conversation for an interactive chat."""

    def __init__(self, service: RAGService, max_turns: int = 10) -> None:
        self.service = service
        self.max_turns = max_turns
        self.history: List[ChatMessage] = []

    def ask(self, question: str) -> AskResponse:
        response = self.service.answer_question(AskRequest(question=question, history=list(self.history)))
        self.history.append(ChatMessage(role="user", content=question))
        self.history.append(ChatMessage(role="assistant", content=response.answer))
        # Keep the last max_turns exchanges.
        self.history = self.history[-2 * self.max_turns :]
        return response

    def reset(self) -> None:
        self.history = []


__all__ = ["RAGService", "ChatSession", "DEFAULT_REFUSAL", "SYSTEM_PROMPT"]

import pytest

from docbot.config import settings
from docbot.models.schemas import AskRequest, ChatMessage
from docbot.rag.pipeline import DEFAULT_REFUSAL, ChatSession, RAGService


@pytest.fixture
def populated_store(store, make_doc):
    store.add_documents(
        [
            make_doc("alpha-doc", [1.0, 0.0, 0.0], source_name="alpha.pdf", content="Alpha is the first letter."),
            make_doc("beta-doc", [0.0, 1.0, 0.0], source_name="beta.pdf", content="Beta is the second letter."),
        ]
    )
    return store


@pytest.fixture
def service(populated_store, fake_embeddings, fake_llm):
    return RAGService(populated_store, fake_embeddings, fake_llm)


def test_answer_uses_retrieved_context(service, fake_llm):
    response = service.answer_question(AskRequest(question="  What is   alpha? "))

    assert response.can_answer is True
    assert response.answer == "Alpha is the first letter."
    assert [s.id for s in response.sources] == ["alpha-doc", "beta-doc"]
    assert response.sources[0].score == pytest.approx(1.0)

    args, kwargs = fake_llm.chat.call_args
    assert args[0] == [{"role": "user", "content": "What is alpha?"}]
    assert "Alpha is the first letter." in kwargs["system_prompt"]
    assert "Source: alpha.pdf" in kwargs["system_prompt"]


def test_top_k_override(service):
    response = service.answer_question(AskRequest(question="alpha", top_k=1))

    assert [s.id for s in response.sources] == ["alpha-doc"]


def test_history_is_forwarded(service, fake_llm):
    history = [ChatMessage(role="user", content="hi"), ChatMessage(role="assistant", content="hello")]

    service.answer_question(AskRequest(question="alpha?", history=history))

    messages = fake_llm.chat.call_args[0][0]
    assert [m["role"] for m in messages] == ["user", "assistant", "user"]


def test_empty_store_refuses_without_llm(store, fake_embeddings, fake_llm):
    response = RAGService(store, fake_embeddings, fake_llm).answer_question(AskRequest(question="alpha?"))

    assert response.can_answer is False
    assert response.answer == DEFAULT_REFUSAL
    fake_llm.chat.assert_not_called()


def test_low_relevance_refuses(service, fake_llm, monkeypatch):
    monkeypatch.setattr(settings, "relevance_threshold", 0.5)

    response = service.answer_question(AskRequest(question="gamma?"))

    assert response.can_answer is False
    fake_llm.chat.assert_not_called()


def test_chat_session_keeps_and_trims_history(service, fake_llm):
    session = ChatSession(service, max_turns=1)

    session.ask("alpha?")
    session.ask("and beta?")

    assert [m.content for m in session.history] == ["and beta?", "Alpha is the first letter."]
    second_call_messages = fake_llm.chat.call_args[0][0]
    assert second_call_messages[0] == {"role": "user", "content": "alpha?"}

    session.reset()
    assert session.history == []


def test_unembeddable_question_refuses(service, fake_embeddings, fake_llm, monkeypatch):
    monkeypatch.setattr(fake_embeddings, "embed_text", lambda text: [])

    response = service.answer_question(AskRequest(question="?"))

    assert response.can_answer is False
    fake_llm.chat.assert_not_called()

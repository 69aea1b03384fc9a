"""
CLI entry points, run in-process against a temp store.
"""

import pytest

from docbot.rag.pipeline import ChatSession, RAGService
from scripts import chat, delete_source, inspect_index, list_sources, search_query, setup_documents


@pytest.fixture
def populated_store(store, make_doc):
    store.add_documents(
        [
            make_doc("a1", [1.0, 0.0, 0.0], source_name="a.txt", content="alpha text"),
            make_doc("b1", [0.0, 1.0, 0.0], source_name="b.txt", content="beta text"),
        ]
    )
    return store


def _scripted(lines):
    feed = iter(lines)
    return lambda prompt: next(feed)


def test_chat_loop(populated_store, fake_embeddings, fake_llm):
    session = ChatSession(RAGService(populated_store, fake_embeddings, fake_llm))
    output = []

    chat.run_loop(session, read=_scripted(["", "what is alpha?", "reset", "QUIT"]), write=output.append, show_sources=True)

    assert "Assistant: Alpha is the first letter." in output
    assert any("a.txt (a1)" in line for line in output)
    assert "History cleared." in output
    assert output[-1] == "Goodbye!"
    assert session.history == []
    fake_llm.chat.assert_called_once()


def test_chat_loop_survives_errors(populated_store, fake_embeddings, fake_llm):
    fake_llm.chat.side_effect = RuntimeError("llm down")
    session = ChatSession(RAGService(populated_store, fake_embeddings, fake_llm))
    output = []

    chat.run_loop(session, read=_scripted(["alpha?", "quit"]), write=output.append)

    assert "Error: llm down" in output
    assert output[-1] == "Goodbye!"


def test_chat_loop_exits_on_eof(populated_store, fake_embeddings, fake_llm):
    def eof(prompt):
        raise EOFError

    output = []
    chat.run_loop(ChatSession(RAGService(populated_store, fake_embeddings, fake_llm)), read=eof, write=output.append)

    assert output[-1] == "Goodbye!"


def test_setup_documents(store, fake_embeddings, tmp_path, monkeypatch, capsys):
    kb = tmp_path / "kb"
    kb.mkdir()
    (kb / "guide.txt").write_text("Beta guide with enough content.", encoding="utf-8")
    monkeypatch.setattr(setup_documents, "get_vector_store", lambda: store)
    monkeypatch.setattr(setup_documents, "EmbeddingsClient", lambda: fake_embeddings)

    setup_documents.main(["--dir", str(kb)])

    assert "Indexed 1 chunks from 1 files" in capsys.readouterr().out
    assert store.sources() == [(("files", "guide.txt"), 1)]


def test_search_query(populated_store, fake_embeddings, monkeypatch, capsys):
    monkeypatch.setattr(search_query, "get_vector_store", lambda: populated_store)
    monkeypatch.setattr(search_query, "EmbeddingsClient", lambda: fake_embeddings)

    search_query.main(["--query", "beta", "--top-k", "1"])

    out = capsys.readouterr().out
    assert "id=b1" in out
    assert "id=a1" not in out


def test_inspect_index(populated_store, monkeypatch, capsys):
    monkeypatch.setattr(inspect_index, "get_vector_store", lambda: populated_store)

    inspect_index.main(["--limit", "1", "--offset", "1"])

    out = capsys.readouterr().out
    assert "Total documents: 2" in out
    assert "#2: b1 [file:b.txt] dim=3" in out


def test_list_sources(populated_store, monkeypatch, capsys):
    monkeypatch.setattr(list_sources, "get_vector_store", lambda: populated_store)

    list_sources.main([])

    out = capsys.readouterr().out
    assert "file:a.txt: 1" in out
    assert "file:b.txt: 1" in out


def test_delete_source(populated_store, monkeypatch, capsys):
    monkeypatch.setattr(delete_source, "get_vector_store", lambda: populated_store)

    delete_source.main(["--type", "file", "--name", "a.txt"])

    assert "Removed 1 documents" in capsys.readouterr().out
    assert [d.id for d in populated_store.iter_documents()] == ["b1"]

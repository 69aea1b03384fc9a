from docbot.indexing import loader
from docbot.indexing.loader import clean_text, load_documents


def test_clean_text_strips_control_chars_and_whitespace():
    raw = "  Hello\x00\x07 \n\n world�\t again  "

    assert clean_text(raw) == "Hello world again"


def test_missing_directory_loads_nothing(tmp_path):
    assert load_documents(tmp_path / "absent") == []


def test_load_text_files_sorted_and_filtered(tmp_path):
    (tmp_path / "b.md").write_text("# Beta\n\nSecond document body.", encoding="utf-8")
    (tmp_path / "a.txt").write_text("Alpha document body text.", encoding="utf-8")
    (tmp_path / "tiny.txt").write_text("short", encoding="utf-8")
    (tmp_path / "data.csv").write_text("x,y\n1,2\n", encoding="utf-8")

    docs = load_documents(tmp_path)

    assert [d.source_name for d in docs] == ["a.txt", "b.md"]
    assert all(d.source_type == "files" for d in docs)
    assert docs[0].content == "Alpha document body text."
    assert docs[1].metadata["path"].endswith("b.md")
    assert docs[0].embedding == []


def test_load_pdf_uses_pypdf(tmp_path, monkeypatch):
    class FakePage:
        def __init__(self, text):
            self._text = text

        def extract_text(self):
            return self._text

    class FakeReader:
        def __init__(self, path):
            self.pages = [FakePage("Page one text."), FakePage(None), FakePage("Page two text.")]

    monkeypatch.setattr(loader, "PdfReader", FakeReader)
    (tmp_path / "Manual.PDF").write_bytes(b"%PDF-1.4 fake")

    docs = load_documents(tmp_path)

    assert len(docs) == 1
    assert docs[0].source_name == "Manual.PDF"
    assert docs[0].content == "Page one text. Page two text."

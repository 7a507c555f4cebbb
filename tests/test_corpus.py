"""
Tests for corpus discovery and document loading.

Run with: pytest tests/test_corpus.py -v
"""

import fitz
import pandas as pd
import pytest

from discrepancy.corpus import CorpusError, walk_corpus, load_document, iter_documents
from discrepancy.corpus.excel_reader import read_excel_text
from discrepancy.corpus.pdf_reader import read_pdf_text, _clean_pdf_text


TEXT_EXTENSIONS = [".html", ".json", ".md", ".yml", ".yaml", ".txt"]
IGNORE = [".git", "node_modules", "scripts", "fonts", "docs/assets"]


@pytest.fixture
def corpus_dir(tmp_path):
    """Create a small site tree with ignored directories and mixed files."""
    files = {
        ".git/x.md": "ignored",
        "node_modules/y.md": "ignored",
        "docs/assets/z.md": "ignored",
        "docs/guide.html": "<p>guide</p>",
        "a.md": "alpha",
        "b.txt": "bravo",
        "c.png": "not text",
        "sub/B.MD": "upper-case extension",
    }
    for relative, content in files.items():
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")

    return tmp_path


class TestWalkCorpus:
    """Tests for walk_corpus."""

    def test_filters_and_orders(self, corpus_dir):
        """Test extension filtering, ignore list and sorted order."""
        paths = walk_corpus(corpus_dir, TEXT_EXTENSIONS, IGNORE)

        assert paths == ["a.md", "b.txt", "docs/guide.html", "sub/B.MD"]

    def test_stable_across_runs(self, corpus_dir):
        """Test that two walks return the same list."""
        assert walk_corpus(corpus_dir, TEXT_EXTENSIONS, IGNORE) == walk_corpus(
            corpus_dir, TEXT_EXTENSIONS, IGNORE
        )

    def test_without_ignore_list(self, corpus_dir):
        """Test that nothing is skipped when no ignore list is given."""
        paths = walk_corpus(corpus_dir, [".md"])

        assert ".git/x.md" in paths
        assert "docs/assets/z.md" in paths

    def test_symlinked_directory_not_followed(self, corpus_dir):
        """Test that a directory link back to the root is not walked."""
        (corpus_dir / "sub" / "loop").symlink_to(corpus_dir, target_is_directory=True)

        paths = walk_corpus(corpus_dir, TEXT_EXTENSIONS, IGNORE)

        assert paths == ["a.md", "b.txt", "docs/guide.html", "sub/B.MD"]

    def test_missing_root(self, tmp_path):
        """Test that a missing root is a corpus error."""
        with pytest.raises(CorpusError):
            walk_corpus(tmp_path / "missing", TEXT_EXTENSIONS)

    def test_root_is_a_file(self, corpus_dir):
        """Test that a file root is a corpus error."""
        with pytest.raises(CorpusError):
            walk_corpus(corpus_dir / "a.md", TEXT_EXTENSIONS)


class TestLoadDocument:
    """Tests for document loading."""

    def test_reads_text(self, corpus_dir):
        assert load_document(corpus_dir, "a.md", 1024) == "alpha"

    def test_oversized_file_skipped(self, tmp_path):
        """Test that files over the cap are not read."""
        (tmp_path / "big.md").write_text("x" * 200, encoding="utf-8")

        assert load_document(tmp_path, "big.md", 100) is None

    def test_invalid_utf8_is_replaced(self, tmp_path):
        """Test that undecodable bytes do not abort loading."""
        (tmp_path / "latin.txt").write_bytes(b"caf\xe9 budget")

        text = load_document(tmp_path, "latin.txt", 1024)

        assert text == "caf\ufffd budget"

    def test_missing_file(self, tmp_path):
        """Test that a vanished file is skipped."""
        assert load_document(tmp_path, "gone.md", 1024) is None

    def test_unreadable_rich_document(self, tmp_path):
        """Test that a corrupt PDF is skipped instead of failing the scan."""
        (tmp_path / "broken.pdf").write_bytes(b"not a pdf at all")

        assert load_document(tmp_path, "broken.pdf", 1024) is None

    def test_iter_documents(self, corpus_dir):
        """Test that skipped documents are yielded with None."""
        (corpus_dir / "big.md").write_text("x" * 2000, encoding="utf-8")

        documents = list(iter_documents(corpus_dir, ["a.md", "big.md"], 1024))

        assert documents == [("a.md", "alpha"), ("big.md", None)]


class TestRichReaders:
    """Tests for PDF and Excel readers."""

    def test_read_pdf_text(self, tmp_path):
        """Test text extraction from a generated PDF."""
        path = tmp_path / "report.pdf"
        doc = fitz.open()
        page = doc.new_page()
        page.insert_text((72, 72), "The shelter now operates 12 vehicles across the county.")
        doc.save(str(path))
        doc.close()

        text = read_pdf_text(path)

        assert "operates 12 vehicles" in text

    def test_clean_pdf_text(self):
        """Test that page numbers and blank runs are removed."""
        raw = "  First line  \n\n\n\n7\nSecond line\n"

        assert _clean_pdf_text(raw) == "First line\n\nSecond line"

    def test_read_excel_text(self, tmp_path):
        """Test that rows render as header: value pairs."""
        path = tmp_path / "budget.xlsx"
        df = pd.DataFrame({
            "Item": ["Fleet size", "Annual budget"],
            "Amount": ["12 vehicles", "$40,000"],
            "Year": [2023, 2024],
        })
        df.to_excel(path, sheet_name="Budget", index=False)

        text = read_excel_text(path)

        lines = text.split("\n")
        assert lines[0] == "Budget"
        assert lines[1] == "Item: Fleet size; Amount: 12 vehicles; Year: 2023"
        assert lines[2] == "Item: Annual budget; Amount: $40,000; Year: 2024"

    def test_read_excel_skips_empty_cells(self, tmp_path):
        """Test that empty cells are left out of a row."""
        path = tmp_path / "sparse.xlsx"
        df = pd.DataFrame({
            "Item": ["Grill sites", None],
            "Count": [None, "3 grill sites"],
        })
        df.to_excel(path, sheet_name="Sites", index=False)

        text = read_excel_text(path)

        assert text.split("\n")[1:] == ["Item: Grill sites", "Count: 3 grill sites"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

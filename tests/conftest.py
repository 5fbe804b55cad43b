# tests/conftest.py
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


class WordTokenizer:
    """Counts whitespace-separated words; keeps tests independent of BPE tables."""

    def count(self, data):
        return len(data.split())


@pytest.fixture
def word_tokenizer():
    return WordTokenizer()


@pytest.fixture
def make_files(tmp_path):
    """Writes {relative path: content} under tmp_path and returns tmp_path."""
    def _make(files):
        for rel_path, content in files.items():
            path = tmp_path / rel_path
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content, encoding="utf-8")
        return tmp_path
    return _make

# tests/test_report.py
import pytest

from codemerge.core.report import format_ranking, top_files, total_tokens
from codemerge.models import TokenizedFile


@pytest.fixture
def sample_files():
    return {
        "src/main.py": TokenizedFile("main.py", 120),
        "README.md": TokenizedFile("README.md", 40),
        "src/utils.py": TokenizedFile("utils.py", 300),
        "docs/guide.md": TokenizedFile("guide.md", 40),
    }


def test_total_tokens(sample_files):
    assert total_tokens(sample_files) == 500
    assert total_tokens({}) == 0


def test_top_files_returns_all_when_fewer_than_count(sample_files):
    ranked = top_files(sample_files, 10)

    assert [path for path, _ in ranked] == ["src/utils.py", "src/main.py", "README.md", "docs/guide.md"]


def test_top_files_ties_ordered_by_path(sample_files):
    ranked = top_files(sample_files, 4)

    assert [f.token_length for _, f in ranked] == [300, 120, 40, 40]
    assert ranked[2][0] == "README.md"
    assert ranked[3][0] == "docs/guide.md"


def test_top_files_limits_to_count(sample_files):
    ranked = top_files(sample_files, 2)

    assert [f.file_name for _, f in ranked] == ["utils.py", "main.py"]
    assert top_files(sample_files, 0) == []


def test_top_files_rejects_negative_count(sample_files):
    with pytest.raises(ValueError):
        top_files(sample_files, -1)


def test_format_ranking(sample_files):
    text = format_ranking(top_files(sample_files, 2), total_tokens(sample_files))
    lines = text.splitlines()

    assert lines[0] == "Top 2 files with most tokens"
    assert "utils.py" in lines[3] and "300" in lines[3]
    assert "main.py" in lines[4] and "120" in lines[4]
    assert lines[-1] == "Tokens: 500"

# src/codemerge/core/report.py
from typing import List, Mapping, Tuple

from codemerge.models import TokenizedFile

RankedFile = Tuple[str, TokenizedFile]


def total_tokens(files: Mapping[str, TokenizedFile]) -> int:
    return sum(f.token_length for f in files.values())


def top_files(files: Mapping[str, TokenizedFile], count: int) -> List[RankedFile]:
    """
    Ranks files by token count, largest first.
    Ties are ordered by relative path so the ranking is stable between runs.
    Returns every file when there are fewer than ``count``.
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    ranked = sorted(files.items(), key=lambda item: (-item[1].token_length, item[0]))
    return ranked[:count]


def format_ranking(ranked: List[RankedFile], total: int) -> str:
    lines = [f"Top {len(ranked)} files with most tokens"]
    lines.append(f"{'Rank':<5} | {'Tokens':<10} | {'File'}")
    lines.append("-" * 60)
    for i, (_, f) in enumerate(ranked):
        lines.append(f"{i+1:<5} | {f.token_length:<10} | {f.file_name}")
    lines.append("-" * 60)
    lines.append(f"Tokens: {total}")
    return "\n".join(lines)

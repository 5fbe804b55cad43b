# src/codemerge/models.py
from dataclasses import dataclass

@dataclass(frozen=True)
class TokenizedFile:
    """Token count of one included file. file_name is the base name only."""
    file_name: str
    token_length: int

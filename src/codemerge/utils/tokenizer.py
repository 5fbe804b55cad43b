# src/codemerge/utils/tokenizer.py
from functools import lru_cache
from typing import Union

import tiktoken

from codemerge.config import ENCODING_NAME


@lru_cache(maxsize=None)
def get_encoding(name: str) -> tiktoken.Encoding:
    return tiktoken.get_encoding(name)


class Tokenizer:
    """Counts byte-pair-encoding tokens for raw file content."""

    def __init__(self, encoding_name: str = ENCODING_NAME):
        self.encoding_name = encoding_name
        self._encoding = None

    @property
    def encoding(self) -> tiktoken.Encoding:
        if self._encoding is None:
            self._encoding = get_encoding(self.encoding_name)
        return self._encoding

    def count(self, data: Union[bytes, str]) -> int:
        """
        Returns the number of tokens in data.
        Bytes that are not valid UTF-8 (binary files) are replaced rather than
        rejected, so every file gets a count.
        """
        if isinstance(data, bytes):
            data = data.decode("utf-8", errors="replace")
        if not data:
            return 0
        # Text like "<|endoftext|>" inside a file is plain content here.
        return len(self.encoding.encode(data, disallowed_special=()))

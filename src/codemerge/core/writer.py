# src/codemerge/core/writer.py
import os
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, Union

from codemerge.config import FILE_HEADER


class MergeWriter:
    """Appends path-tagged file contents to the merge artifact, byte for byte."""

    def __init__(self, path: Path, stream: BinaryIO):
        self.path = path
        self.stream = stream

    @classmethod
    @contextmanager
    def open(cls, path: Union[str, Path]) -> Iterator["MergeWriter"]:
        """
        Creates (or truncates) the output file and yields a writer over it.
        The file is closed on every exit path; whatever was written before an
        error stays on disk.
        """
        path = Path(path)
        with open(path, "wb") as stream:
            yield cls(path, stream)

    def write_file(self, rel_path: str, content: bytes) -> None:
        # Paths keep their on-disk bytes, even when they are not valid UTF-8.
        self.stream.write(os.fsencode(f"{FILE_HEADER}{rel_path}\n"))
        self.stream.write(content)
        self.stream.write(b"\n")

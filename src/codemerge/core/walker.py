# src/codemerge/core/walker.py
import logging
import os
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional

from codemerge.core.ignore import IgnoreResolver, build_spec
from codemerge.core.report import total_tokens
from codemerge.core.writer import MergeWriter
from codemerge.models import TokenizedFile
from codemerge.utils.tokenizer import Tokenizer

logger = logging.getLogger(__name__)


class Walker:
    """
    One walk over a directory tree.

    Collects a TokenizedFile for every included file, keyed by its path
    relative to the root in traversal order, and streams the files into the
    merge writer when one is attached. Not meant to be reused across walks.
    """

    def __init__(
        self,
        root_dir: Path,
        ignores: Iterable[str] = (),
        writer: Optional[MergeWriter] = None,
        verbose: bool = False,
        tokenizer: Optional[Tokenizer] = None,
        matches: Iterable[str] = (),
    ):
        self.root_dir = Path(root_dir).resolve()
        self.writer = writer
        self.verbose = verbose
        self.tokenizer = tokenizer or Tokenizer()
        self.resolver = IgnoreResolver(
            self.root_dir,
            ignores,
            output_file=writer.path if writer is not None else None,
        )
        matches = list(matches)
        self.match_spec = build_spec(matches) if matches else None
        self.files: Dict[str, TokenizedFile] = {}

    def _is_selected(self, rel_path: str) -> bool:
        return self.match_spec is None or self.match_spec.match_file(rel_path)

    def _walk_dir(self, dir_path: Path) -> Iterator[str]:
        with os.scandir(dir_path) as it:
            entries = sorted(it, key=lambda e: e.name)

        for entry in entries:
            rel_path = Path(entry.path).relative_to(self.root_dir).as_posix()

            if entry.is_dir(follow_symlinks=False):
                # Prune the whole subtree instead of filtering its files later.
                if self.resolver.should_exclude(rel_path, is_dir=True):
                    logger.debug("Pruning directory: %s", rel_path)
                    continue
                yield from self._walk_dir(Path(entry.path))
                continue

            if entry.is_dir():
                logger.debug("Skipping symlinked directory: %s", rel_path)
                continue

            if self.resolver.should_exclude(rel_path):
                continue
            if not self._is_selected(rel_path):
                continue
            yield rel_path

    def iter_paths(self) -> Iterator[str]:
        """
        Yields the relative POSIX paths of included files, depth-first and in
        lexical order within each directory.
        """
        self.resolver.load()
        yield from self._walk_dir(self.root_dir)

    def _process(self, rel_path: str) -> bytes:
        file_path = self.root_dir / rel_path
        with open(file_path, "rb") as f:
            content = f.read()

        self.files[rel_path] = TokenizedFile(
            file_name=file_path.name,
            token_length=self.tokenizer.count(content),
        )
        return content

    def walk(self) -> List[str]:
        """
        Processes every included file and returns their paths in traversal order.
        The first I/O error aborts the walk; files processed before it stay
        recorded and already-written output stays in the sink.
        """
        included = []
        for rel_path in self.iter_paths():
            content = self._process(rel_path)
            if self.verbose:
                logger.info("File: %s Tokens: %d", rel_path, self.files[rel_path].token_length)
            if self.writer is not None:
                self.writer.write_file(rel_path, content)
            included.append(rel_path)
        return included

    def total_tokens(self) -> int:
        return total_tokens(self.files)

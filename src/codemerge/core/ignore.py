# src/codemerge/core/ignore.py
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Set, Union

import pathspec

from codemerge.config import IGNORE_FILENAME, IMPLICIT_IGNORE_PATTERNS

logger = logging.getLogger(__name__)


def read_ignore_file(root_dir: Path) -> List[str]:
    """
    Reads pattern lines from the ignore file at the root of the tree.

    Only ``root_dir/.gitignore`` is looked up; ignore files in subdirectories
    are never read, so a tree has exactly one global rule set. Comment lines
    and blank lines are dropped. A missing file yields no patterns; any other
    read error propagates.
    """
    ignore_file = root_dir / IGNORE_FILENAME
    if not ignore_file.is_file():
        return []

    lines = []
    with open(ignore_file, "r", encoding="utf-8") as f:
        for line in f.read().splitlines():
            if line.startswith("#") or not line.strip():
                continue
            lines.append(line)

    logger.debug("Loaded %d pattern(s) from %s", len(lines), ignore_file)
    return lines


def build_spec(lines: Iterable[str]) -> pathspec.GitIgnoreSpec:
    return pathspec.GitIgnoreSpec.from_lines(lines)


class IgnoreResolver:
    """
    Decides whether a path under the traversal root is excluded.

    Patterns are compiled in a fixed order: the implicit VCS directory, the
    root ignore file, then caller patterns. Matching follows gitignore rules
    (the last matching pattern wins, ``!`` re-includes).
    """

    def __init__(
        self,
        root_dir: Path,
        patterns: Iterable[str] = (),
        output_file: Optional[Union[str, Path]] = None,
    ):
        self.root_dir = Path(root_dir).resolve()
        self.patterns = list(patterns)
        self.output_paths = self._relative_outputs(output_file)
        self._lines: Optional[List[str]] = None
        self._spec: Optional[pathspec.GitIgnoreSpec] = None

    def _relative_outputs(self, output_file) -> Set[str]:
        """
        Relative forms of the output file inside the tree: its fully resolved
        location, and its own name under the resolved parent directory so an
        output that is itself a symlink is still recognized.
        """
        if output_file is None:
            return set()
        output_file = Path(output_file).absolute()
        candidates = [output_file.resolve(), output_file.parent.resolve() / output_file.name]

        paths = set()
        for candidate in candidates:
            try:
                paths.add(candidate.relative_to(self.root_dir).as_posix())
            except ValueError:
                # Outside the tree; never visited under this form.
                continue
        return paths

    def load(self) -> None:
        """Reads the root ignore file and compiles the matcher for this walk."""
        self._lines = IMPLICIT_IGNORE_PATTERNS + read_ignore_file(self.root_dir) + self.patterns
        self._spec = build_spec(self._lines)

    @property
    def lines(self) -> List[str]:
        if self._lines is None:
            self.load()
        return self._lines

    @property
    def spec(self) -> pathspec.GitIgnoreSpec:
        if self._spec is None:
            self.load()
        return self._spec

    def should_exclude(self, rel_path: Union[str, Path], is_dir: bool = False) -> bool:
        path = Path(rel_path).as_posix()

        if not is_dir:
            if path.endswith(IGNORE_FILENAME):
                return True
            if path in self.output_paths:
                return True

        # A trailing slash lets "build/" style patterns match the directory itself.
        if is_dir:
            path += "/"
        return self.spec.match_file(path)

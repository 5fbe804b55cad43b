# src/codemerge/core/tree.py
from typing import Dict, Iterable, List

Node = Dict[str, "Node"]


def build_tree(rel_paths: Iterable[str]) -> Node:
    root: Node = {}
    for rel_path in rel_paths:
        node = root
        for part in rel_path.split("/"):
            node = node.setdefault(part, {})
    return root


def render_tree(rel_paths: Iterable[str], root_name: str) -> str:
    """Renders included file paths as an indented tree under root_name/."""
    lines: List[str] = [f"{root_name}/"]

    def _render(node: Node, prefix: str) -> None:
        names = sorted(node)
        for i, name in enumerate(names):
            is_last = i == len(names) - 1
            children = node[name]
            label = f"{name}/" if children else name
            lines.append(f"{prefix}{'└── ' if is_last else '├── '}{label}")
            if children:
                _render(children, prefix + ("    " if is_last else "│   "))

    _render(build_tree(rel_paths), "")
    return "\n".join(lines) + "\n"

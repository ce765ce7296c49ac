#!/usr/bin/env python
"""Module layout rules for the relay package.

Rules, checked on top-level statements of every file under ``design_relay/``:
- ``__all__``, when present, is a single assignment and the last statement.
- At most one non-dataclass class per file (pydantic models count as data).
- No imports inside function, method or class bodies.
"""

from __future__ import annotations

import ast
import sys
import argparse
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
DEFAULT_DIRS = ("design_relay",)


def _is_all_target(node: ast.AST) -> bool:
    return isinstance(node, ast.Name) and node.id == "__all__"


def _assigns_all(node: ast.stmt) -> bool:
    if isinstance(node, ast.Assign):
        return any(_is_all_target(t) for t in node.targets)
    if isinstance(node, (ast.AnnAssign, ast.AugAssign)):
        return _is_all_target(node.target)
    return False


def _is_data_model(node: ast.ClassDef) -> bool:
    for base in node.bases:
        name = base.id if isinstance(base, ast.Name) else getattr(base, "attr", "")
        if name == "BaseModel":
            return True
    for deco in node.decorator_list:
        target = deco.func if isinstance(deco, ast.Call) else deco
        name = target.id if isinstance(target, ast.Name) else getattr(target, "attr", "")
        if name == "dataclass":
            return True
    return False


def _all_violations(tree: ast.Module, rel: str) -> list[str]:
    positions = [i for i, node in enumerate(tree.body) if _assigns_all(node)]
    if not positions:
        return []
    if len(positions) > 1 or isinstance(tree.body[positions[0]], ast.AugAssign):
        return [f"  {rel}: `__all__` must be one plain assignment"]
    trailing = tree.body[positions[0] + 1 :]
    return [f"  {rel}:{node.lineno} statement after `__all__`" for node in trailing]


def _class_violations(tree: ast.Module, rel: str) -> list[str]:
    names = [n.name for n in tree.body if isinstance(n, ast.ClassDef) and not _is_data_model(n)]
    if len(names) <= 1:
        return []
    return [f"  {rel}: {len(names)} classes ({', '.join(names)})"]


def _local_import_violations(tree: ast.Module, rel: str) -> list[str]:
    found: list[str] = []
    scopes = (ast.FunctionDef, ast.AsyncFunctionDef, ast.ClassDef)
    for outer in ast.walk(tree):
        if not isinstance(outer, scopes):
            continue
        for stmt in outer.body:
            for inner in ast.walk(stmt):
                if isinstance(inner, (ast.Import, ast.ImportFrom)):
                    found.append(f"  {rel}:{inner.lineno} local import")
    return sorted(set(found))


def collect_violations(path: Path, root: Path = ROOT) -> list[str]:
    try:
        tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    except (OSError, UnicodeDecodeError, SyntaxError):
        return []
    rel = str(path.relative_to(root))
    return _all_violations(tree, rel) + _class_violations(tree, rel) + _local_import_violations(tree, rel)


def scan(dirs: tuple[str, ...] | list[str] = DEFAULT_DIRS, root: Path = ROOT) -> list[str]:
    violations: list[str] = []
    for d in dirs:
        base = (root / d).resolve()
        if not base.is_dir():
            continue
        for py_file in sorted(base.rglob("*.py")):
            if "__pycache__" in py_file.parts:
                continue
            violations.extend(collect_violations(py_file, root))
    return violations


def main() -> int:
    parser = argparse.ArgumentParser(description="Check module layout rules.")
    parser.add_argument("--dirs", nargs="+", default=list(DEFAULT_DIRS), help="Directories to scan")
    args = parser.parse_args()

    violations = scan(args.dirs)
    if violations:
        print("Module layout violations:", file=sys.stderr)
        for violation in violations:
            print(violation, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

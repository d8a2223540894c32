from __future__ import annotations

import argparse
import ast
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Collection, Iterable, Sequence

# The domain layer holds pure entities and folds; it may import only the
# standard library and other domain modules.
FORBIDDEN_MODULES = frozenset(
    {
        "fastapi",
        "starlette",
        "pydantic",
        "sqlalchemy",
        "redis",
        "httpx",
        "requests",
        "opentelemetry",
        "prometheus_client",
        "cafepos.application",
        "cafepos.api",
        "cafepos.infrastructure",
    }
)

DEFAULT_DOMAIN_PATH = Path(__file__).resolve().parents[1] / "src" / "cafepos" / "domain"


@dataclass(frozen=True, order=True)
class Violation:
    file_path: Path
    line: int
    module: str


def _python_files(root: Path) -> Iterable[Path]:
    if root.is_file() and root.suffix == ".py":
        yield root
        return
    if root.is_dir():
        yield from sorted(root.rglob("*.py"))


def _matches_forbidden(module: str, forbidden: Collection[str]) -> bool:
    return any(module == name or module.startswith(f"{name}.") for name in forbidden)


def _dynamic_import_target(node: ast.Call) -> str | None:
    """Literal target of ``importlib.import_module("x")`` or ``__import__("x")``."""
    func = node.func
    is_dynamic = (isinstance(func, ast.Name) and func.id == "__import__") or (
        isinstance(func, ast.Attribute) and func.attr == "import_module"
    )
    if not is_dynamic or not node.args:
        return None
    first = node.args[0]
    if isinstance(first, ast.Constant) and isinstance(first.value, str):
        return first.value
    return None


def _imported_modules(tree: ast.AST) -> Iterable[tuple[int, str]]:
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield node.lineno, alias.name
        elif isinstance(node, ast.ImportFrom) and node.module and node.level == 0:
            yield node.lineno, node.module
        elif isinstance(node, ast.Call):
            target = _dynamic_import_target(node)
            if target is not None:
                yield node.lineno, target


def _scan_file(file_path: Path, forbidden: Collection[str]) -> list[Violation]:
    tree = ast.parse(file_path.read_text(encoding="utf-8"), filename=str(file_path))
    return [
        Violation(file_path=file_path, line=line, module=module)
        for line, module in _imported_modules(tree)
        if _matches_forbidden(module, forbidden)
    ]


def find_violations(
    paths: Sequence[Path],
    forbidden: Collection[str] = FORBIDDEN_MODULES,
) -> list[Violation]:
    violations: list[Violation] = []
    for path in paths:
        for file_path in _python_files(path):
            violations.extend(_scan_file(file_path, forbidden))
    return sorted(violations)


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Dependency policy check for src/cafepos/domain imports."
    )
    parser.add_argument(
        "--path",
        action="append",
        default=[],
        help="Path to scan (repeatable). Defaults to src/cafepos/domain.",
    )
    parser.add_argument(
        "--forbid",
        action="append",
        default=[],
        help="Additional module to forbid (repeatable).",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    scan_paths = [Path(item) for item in args.path] if args.path else [DEFAULT_DOMAIN_PATH]
    forbidden = FORBIDDEN_MODULES | set(args.forbid)

    violations = find_violations(scan_paths, forbidden)
    if not violations:
        print("depcheck passed")
        return 0

    print(f"depcheck failed: {len(violations)} forbidden import(s) detected")
    for violation in violations:
        print(f"{violation.file_path}:{violation.line} -> {violation.module}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))

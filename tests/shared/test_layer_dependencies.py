"""Static checks for cross-layer import direction.

Runtime modules may only import from their own layer or lower layers:
``packages`` (shared libraries) < ``resources`` (substrates) < ``services`` <
``actors``.
"""

from __future__ import annotations

import ast
from dataclasses import dataclass
from pathlib import Path

_LAYERS: dict[str, int] = {
    "packages": 0,
    "resources": 1,
    "services": 2,
    "actors": 3,
}


@dataclass(frozen=True)
class _Violation:
    """One layer-direction violation with stable source location."""

    file_path: Path
    line: int
    message: str

    def format(self) -> str:
        """Render violation for assertion output."""
        return f"{self.file_path}:{self.line}: {self.message}"


def test_modules_do_not_import_higher_layers() -> None:
    """Reject static import edges from a lower layer to a higher one."""
    repo_root = Path(__file__).resolve().parents[2]

    violations: list[_Violation] = []
    for file_path in _runtime_files(repo_root):
        rel = file_path.relative_to(repo_root)
        caller_layer = _LAYERS[rel.parts[0]]
        tree = ast.parse(file_path.read_text(encoding="utf-8"), filename=str(rel))
        for module_name, line in _absolute_imports(tree):
            target_layer = _LAYERS.get(module_name.split(".", 1)[0])
            if target_layer is None or target_layer <= caller_layer:
                continue
            violations.append(
                _Violation(
                    file_path=rel,
                    line=line,
                    message=(
                        f"L{caller_layer} module imports higher layer "
                        f"L{target_layer} via '{module_name}'"
                    ),
                )
            )

    assert not violations, "\n".join(v.format() for v in violations)


def test_substrates_do_not_import_each_other() -> None:
    """Each substrate depends only on shared packages."""
    repo_root = Path(__file__).resolve().parents[2]
    substrates_root = repo_root / "resources" / "substrates"

    violations: list[_Violation] = []
    for file_path in _runtime_files(repo_root):
        rel = file_path.relative_to(repo_root)
        if rel.parts[:2] != ("resources", "substrates"):
            continue
        own = rel.parts[2]
        tree = ast.parse(file_path.read_text(encoding="utf-8"), filename=str(rel))
        for module_name, line in _absolute_imports(tree):
            parts = module_name.split(".")
            if parts[:2] != ["resources", "substrates"] or len(parts) < 3:
                continue
            if parts[2] != own and (substrates_root / parts[2]).exists():
                violations.append(
                    _Violation(
                        file_path=rel,
                        line=line,
                        message=f"substrate '{own}' imports '{module_name}'",
                    )
                )

    assert not violations, "\n".join(v.format() for v in violations)


def _runtime_files(repo_root: Path) -> tuple[Path, ...]:
    """Return non-test Python files under the layered roots."""
    files: list[Path] = []
    for root_name in _LAYERS:
        root = repo_root / root_name
        if not root.exists():
            continue
        for file_path in root.rglob("*.py"):
            if "tests" in file_path.relative_to(repo_root).parts:
                continue
            files.append(file_path)
    return tuple(sorted(files))


def _absolute_imports(tree: ast.Module) -> list[tuple[str, int]]:
    """Return absolute imported module names with their line numbers."""
    imports: list[tuple[str, int]] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            imports.extend((alias.name, node.lineno) for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.level == 0 and node.module:
            imports.append((node.module, node.lineno))
    return imports

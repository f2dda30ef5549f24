"""Static checks that garden code draws randomness only from the context rng.

Seeded runs (``--seed``, the test fixtures) are only reproducible if no
module calls ``random.random()`` and friends directly, or quietly builds its
own unseeded generator.
"""

import ast
from pathlib import Path
from typing import Iterator, List, Tuple

import pytest

GARDEN_ROOT = Path(__file__).resolve().parents[1] / "garden"

# Types may be named; module-level functions may not be called
PERMITTED_NAMES = {"Random"}

# resolve_rng is the single audited fallback to random.Random()
UNSEEDED_ALLOWED = {"context.py"}


def _garden_modules() -> Iterator[Path]:
    for path in sorted(GARDEN_ROOT.rglob("*.py")):
        if "__pycache__" not in path.parts:
            yield path


class _RandomAudit(ast.NodeVisitor):
    """Collects global-random usages and unseeded generators in one module."""

    def __init__(self) -> None:
        self.aliases = set()
        self.global_uses: List[Tuple[int, str]] = []
        self.unseeded: List[int] = []
        self._attribute_values = set()

    def visit_Import(self, node: ast.Import) -> None:
        for alias in node.names:
            if alias.name == "random":
                self.aliases.add(alias.asname or "random")

    def visit_ImportFrom(self, node: ast.ImportFrom) -> None:
        if node.module == "random":
            for alias in node.names:
                if alias.name not in PERMITTED_NAMES:
                    self.global_uses.append((node.lineno, f"from random import {alias.name}"))

    def visit_Attribute(self, node: ast.Attribute) -> None:
        if isinstance(node.value, ast.Name) and node.value.id in self.aliases:
            self._attribute_values.add(id(node.value))
            if node.attr not in PERMITTED_NAMES:
                self.global_uses.append((node.lineno, f"{node.value.id}.{node.attr}"))
        self.generic_visit(node)

    def visit_Name(self, node: ast.Name) -> None:
        # A bare alias, e.g. passing the module itself around as an rng
        if node.id in self.aliases and id(node) not in self._attribute_values:
            self.global_uses.append((node.lineno, node.id))

    def visit_Call(self, node: ast.Call) -> None:
        func = node.func
        if (
            isinstance(func, ast.Attribute)
            and func.attr == "Random"
            and isinstance(func.value, ast.Name)
            and func.value.id in self.aliases
            and not node.args
            and not node.keywords
        ):
            self.unseeded.append(node.lineno)
        self.generic_visit(node)


def _audit(path: Path) -> _RandomAudit:
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    audit = _RandomAudit()
    # Imports first so aliases are known before any usage is visited
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            audit.visit_Import(node)
    audit.visit(tree)
    return audit


@pytest.fixture(scope="module")
def audits():
    return {path: _audit(path) for path in _garden_modules()}


def test_garden_package_is_scanned(audits):
    names = {path.name for path in audits}
    assert {"lifecycle.py", "snow.py", "weather.py", "context.py"} <= names


def test_no_global_random_usage(audits):
    violations = [
        f"{path.relative_to(GARDEN_ROOT)}:{line}: {detail}"
        for path, audit in audits.items()
        for line, detail in audit.global_uses
    ]
    assert not violations, "Global random usage detected:\n" + "\n".join(violations)


def test_unseeded_generators_only_in_resolve_rng(audits):
    violations = [
        f"{path.relative_to(GARDEN_ROOT)}:{line}"
        for path, audit in audits.items()
        if path.name not in UNSEEDED_ALLOWED
        for line in audit.unseeded
    ]
    assert not violations, "random.Random() without a seed:\n" + "\n".join(violations)

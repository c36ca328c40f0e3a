"""Shared fixtures and helpers for tests."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

_REPO_ROOT = Path(__file__).parent.parent
_DATA_DIR = Path(__file__).parent / "data"


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        if rel.parts and rel.parts[0] == "unit":
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def counter_ast_path() -> Path:
    """Return the path to a solc 0.8 AST of a small Counter contract."""
    return _DATA_DIR / "counter_ast.json"


@pytest.fixture
def counter_ast_json(counter_ast_path: Path) -> dict[str, Any]:
    """Return the Counter AST as decoded JSON."""
    return json.loads(counter_ast_path.read_text(encoding="utf-8"))


@pytest.fixture
def standard_json_output(counter_ast_json: dict[str, Any]) -> dict[str, Any]:
    """Return a solc standard-JSON output holding the Counter AST and one source without an AST."""
    return {
        "contracts": {},
        "sources": {
            "src/Counter.sol": {"id": 0, "ast": counter_ast_json},
            "src/Empty.sol": {"id": 1},
        },
    }


@pytest.fixture
def write_json(tmp_path: Path) -> Callable[..., Path]:
    """Write a JSON document to a temporary file and return its path."""

    def _write(document: Any, name: str = "ast.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return _write

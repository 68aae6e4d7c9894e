from __future__ import annotations

import sys
from pathlib import Path
from typing import Dict, List

import pytest

BASE_DIR = Path(__file__).resolve().parent.parent
SRC_DIR = (BASE_DIR / "src").resolve()

if str(BASE_DIR) not in sys.path:
    sys.path.append(str(BASE_DIR))
if str(SRC_DIR) not in sys.path:
    sys.path.append(str(SRC_DIR))

from goto_ref.utils import DEBUG_AST_VAR, DEBUG_TOKENS_VAR  # noqa: E402


@pytest.fixture(autouse=True)
def _quiet_debug_flags(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's GOTO_DEBUG_* settings out of captured output."""
    monkeypatch.delenv(DEBUG_AST_VAR, raising=False)
    monkeypatch.delenv(DEBUG_TOKENS_VAR, raising=False)


def pytest_collection_modifyitems(
    session: pytest.Session,
    config: pytest.Config,
    items: List[pytest.Item],
) -> None:
    """Scenario tables are keyed by id; two rows sharing one would hide a case."""
    del session
    del config

    seen: Dict[str, int] = {}
    duplicates: List[str] = []
    for item in items:
        if item.nodeid in seen:
            duplicates.append(item.nodeid)
            continue
        seen[item.nodeid] = 1

    if not duplicates:
        return

    lines = "\n".join(f"- {nodeid}" for nodeid in sorted(set(duplicates)))
    raise pytest.UsageError(f"Duplicate scenario ids in collection:\n{lines}")

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


@pytest.fixture
def write_bundle(tmp_path: Path) -> Callable[[dict[str, object]], Path]:
    def write(payload: dict[str, object]) -> Path:
        path = tmp_path / "bundle.json"
        path.write_text(json.dumps(payload))
        return path

    return write

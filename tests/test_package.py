from __future__ import annotations

import warnings
from pathlib import Path

import pytest

import friday

SOURCES = sorted(Path(friday.__file__).parent.rglob("*.py"))


@pytest.mark.parametrize("path", SOURCES, ids=lambda p: str(p.relative_to(Path(friday.__file__).parent)))
def test_module_compiles_without_warnings(path):
    source = path.read_text(encoding="utf-8")
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        compile(source, str(path), "exec")

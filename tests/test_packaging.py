from pathlib import Path

import pytest

tomllib = pytest.importorskip("tomllib")

PYPROJECT = Path(__file__).parent.parent / "pyproject.toml"


def test_streamlit_script_is_not_installed():
    with PYPROJECT.open("rb") as f:
        modules = tomllib.load(f)["tool"]["setuptools"]["py-modules"]
    assert "app" not in modules
    assert {"rules", "anatomy", "pain", "main"} <= set(modules)

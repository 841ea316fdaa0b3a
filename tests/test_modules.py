from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
LIBRARY_MODULES = [
    "scrolly_config", "load_data", "bubble_scales", "year_frames",
    "bubble_scene", "visibility", "year_animator", "step_dispatch",
]


@pytest.mark.parametrize("name", LIBRARY_MODULES)
def test_library_modules_are_not_scripts(name):
    first = (ROOT / f"{name}.py").read_text(encoding="utf-8").splitlines()[0]
    assert not first.startswith("#!")
    assert "__main__" not in (ROOT / f"{name}.py").read_text(encoding="utf-8")


def test_entry_point_is_a_script():
    src = (ROOT / "build_scrolly.py").read_text(encoding="utf-8")
    assert src.startswith("#!/usr/bin/env python3")
    assert 'if __name__ == "__main__":' in src

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable

import pytest


def write_package_json(root: Path, section: Dict[str, Any] | None = None, **extra: Any) -> Path:
    data: Dict[str, Any] = {"name": "example-app", "version": "1.0.0", **extra}
    if section is not None:
        data["config"] = {"mockups": section}
    path = root / "package.json"
    path.write_text(json.dumps(data, indent=2))
    return path


def touch_files(root: Path, names: Iterable[str]) -> None:
    for name in names:
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("export default { title: 'x', component: () => null };\n")


@pytest.fixture()
def project(tmp_path: Path) -> Path:
    """A small app tree with mockups under src/ and a stray one under lib/."""

    touch_files(
        tmp_path,
        [
            "src/components/Button.mockup.jsx",
            "src/components/Radio.mockup.jsx",
            "src/screens/Home/Home.mockup.jsx",
            "src/components/Button.jsx",
            "lib/Legacy.mockup.jsx",
        ],
    )
    return tmp_path

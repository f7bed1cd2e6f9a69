from __future__ import annotations

from pathlib import Path

from mockup_kit.config import ConfigOverrides, resolve_configuration
from mockup_kit.locator import import_specifier, locate_mockups, strip_extension
from .conftest import touch_files


def _locate(root: Path, **overrides):
    config = resolve_configuration(ConfigOverrides(**overrides), root)
    return locate_mockups(config, cwd=root)


def test_discovers_mockups_under_default_search_dir(project: Path) -> None:
    manifest = _locate(project)

    assert sorted(manifest.root_relative_paths) == [
        "src/components/Button.mockup.jsx",
        "src/components/Radio.mockup.jsx",
        "src/screens/Home/Home.mockup.jsx",
    ]
    assert manifest.output_file == project.absolute() / "src" / "mockups.js"


def test_output_relative_paths_are_import_references(project: Path) -> None:
    manifest = _locate(project, output_file="./src/generated/mockups.js")

    by_root = {item.root_relative_path: item.output_relative_path for item in manifest.files}
    assert by_root["src/components/Button.mockup.jsx"] == "../components/Button.mockup"

    manifest = _locate(project)
    by_root = {item.root_relative_path: item.output_relative_path for item in manifest.files}
    assert by_root["src/components/Button.mockup.jsx"] == "./components/Button.mockup"


def test_overlapping_search_dirs_do_not_duplicate(project: Path) -> None:
    manifest = _locate(project, search_dir=["./src", "./src/components", "src/../src"])

    absolutes = [item.absolute_path for item in manifest.files]
    assert len(absolutes) == len(set(absolutes)) == 3


def test_multiple_search_dirs(project: Path) -> None:
    manifest = _locate(project, search_dir=["./src/components", "./lib"])

    assert sorted(manifest.root_relative_paths) == [
        "lib/Legacy.mockup.jsx",
        "src/components/Button.mockup.jsx",
        "src/components/Radio.mockup.jsx",
    ]


def test_paths_are_posix_and_extension_free(project: Path) -> None:
    manifest = _locate(project, search_dir=["."], output_file="./dist/out/mockups.js")

    for item in manifest.files:
        assert "\\" not in item.root_relative_path
        assert "\\" not in item.output_relative_path
        assert not item.output_relative_path.endswith(".jsx")
        assert item.output_relative_path.startswith("../")


def test_root_relative_paths_follow_working_directory(project: Path) -> None:
    config = resolve_configuration(None, project)
    manifest = locate_mockups(config, cwd=project / "src")

    assert "components/Button.mockup.jsx" in manifest.root_relative_paths


def test_empty_result_is_valid(tmp_path: Path) -> None:
    manifest = _locate(tmp_path)
    assert manifest.files == []


def test_ignore_patterns_exclude_files(project: Path) -> None:
    touch_files(project, ["src/node_modules/pkg/Thing.mockup.jsx"])

    assert "src/node_modules/pkg/Thing.mockup.jsx" in _locate(project).root_relative_paths
    manifest = _locate(project, ignore=["node_modules/", "Radio.*"])
    assert sorted(manifest.root_relative_paths) == [
        "src/components/Button.mockup.jsx",
        "src/screens/Home/Home.mockup.jsx",
    ]


def test_generated_file_is_never_its_own_entry(project: Path) -> None:
    (project / "src" / "mockups.js").write_text("export default {};\n")
    manifest = _locate(project, pattern="**/*.js*")

    assert "src/mockups.js" not in manifest.root_relative_paths
    assert "src/components/Button.jsx" in manifest.root_relative_paths


def test_path_helpers() -> None:
    assert strip_extension("components/Button.mockup.tsx") == "components/Button.mockup"
    assert import_specifier("a/b") == "./a/b"
    assert import_specifier("../a/b") == "../a/b"

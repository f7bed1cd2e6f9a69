from __future__ import annotations

import re
from pathlib import Path

from mockup_kit.models import DiscoveredFile, LoaderManifest
from mockup_kit.template import compose_entries, generate_template


def _manifest(tmp_path: Path, names) -> LoaderManifest:
    files = [
        DiscoveredFile(
            absolute_path=tmp_path / name,
            root_relative_path=name,
            output_relative_path="./" + name.rsplit(".", 1)[0],
        )
        for name in names
    ]
    return LoaderManifest(output_file=tmp_path / "mockups.js", files=files)


def test_baseline_output(tmp_path: Path) -> None:
    text = generate_template(_manifest(tmp_path, ["b/Radio.mockup.jsx", "a/Button.mockup.jsx"]))

    assert text == (
        "// Auto-generated file created by mockup-kit\n"
        "// Do not edit.\n"
        "\n"
        "export default {\n"
        '  "a/Button.mockup.jsx": require("./a/Button.mockup"),\n'
        '  "b/Radio.mockup.jsx": require("./b/Radio.mockup"),\n'
        "};\n"
    )


def test_empty_manifest(tmp_path: Path) -> None:
    text = generate_template(_manifest(tmp_path, []))
    assert text.endswith("export default {};\n")


def test_output_is_independent_of_discovery_order(tmp_path: Path) -> None:
    names = ["z/Z.mockup.jsx", "a/A.mockup.jsx", "m/M.mockup.jsx"]
    first = generate_template(_manifest(tmp_path, names))
    second = generate_template(_manifest(tmp_path, list(reversed(names))))
    assert first == second


def test_keys_match_discovered_files(tmp_path: Path) -> None:
    names = ["x/One.mockup.jsx", "y/Two.mockup.jsx", "y/z/Three.mockup.jsx"]
    text = generate_template(_manifest(tmp_path, names))

    keys = re.findall(r'^  "([^"]+)": require', text, flags=re.MULTILINE)
    assert sorted(keys) == sorted(names)
    assert [entry.key for entry in compose_entries(_manifest(tmp_path, names))] == sorted(names)


def test_project_formatter_options_are_applied(tmp_path: Path) -> None:
    (tmp_path / ".prettierrc").write_text('{"singleQuote": true, "semi": false, "tabWidth": 4, "trailingComma": "none"}')
    text = generate_template(_manifest(tmp_path, ["a/A.mockup.jsx", "b/B.mockup.jsx"]))

    assert "    'a/A.mockup.jsx': require('./a/A.mockup'),\n" in text
    assert "    'b/B.mockup.jsx': require('./b/B.mockup')\n}\n" in text


def test_quotes_inside_paths_are_escaped(tmp_path: Path) -> None:
    text = generate_template(_manifest(tmp_path, ['it"s/A.mockup.jsx']))
    assert '"it\\"s/A.mockup.jsx": require("./it\\"s/A.mockup")' in text


def test_crlf_line_endings(tmp_path: Path) -> None:
    (tmp_path / ".prettierrc.yaml").write_text("endOfLine: crlf\nuseTabs: true\n")
    text = generate_template(_manifest(tmp_path, ["a/A.mockup.jsx"]))

    assert "\r\n" in text
    assert "\n" not in text.replace("\r\n", "")
    assert '\t"a/A.mockup.jsx"' in text

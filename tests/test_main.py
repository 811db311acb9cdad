import json
from pathlib import Path

import pytest

from mapstr.__main__ import main


@pytest.fixture
def document(tmp_path: Path) -> Path:
    path = tmp_path / "event.json"
    _ = path.write_text(
        json.dumps({"Host": {"Name": "web-1", "password": "p"}, "tags": ["a"], "output": {"hosts": ["es:9200"]}}),
    )
    return path


def test_get(document: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["get", str(document), "Host.Name"]) == 0
    assert capsys.readouterr().out == '"web-1"\n'


def test_get_ignore_case(document: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["get", "-i", str(document), "host.name"]) == 0
    assert capsys.readouterr().out == '"web-1"\n'


def test_get_map_value_is_pretty_printed(document: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["get", str(document), "output"]) == 0
    assert json.loads(capsys.readouterr().out) == {"hosts": ["es:9200"]}


def test_get_missing_path(document: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["get", str(document), "Host.missing"]) == 1
    assert capsys.readouterr().err.startswith("mapstr: key not found")


def test_flatten(document: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["flatten", str(document)]) == 0
    assert json.loads(capsys.readouterr().out) == {
        "Host.Name": "web-1",
        "Host.password": "p",
        "tags": ["a"],
        "output.hosts": ["es:9200"],
    }


def test_keys(document: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["keys", str(document)]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "Host",
        "Host.Name",
        "Host.password",
        "output",
        "output.hosts",
        "tags",
    ]


def test_print_masked(document: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MAPSTR_MASK_KEYS", raising=False)
    assert main(["print", "--mask", str(document)]) == 0
    printed = json.loads(capsys.readouterr().out)
    assert printed["Host"]["password"] == "xxxxx"
    assert printed["output"]["hosts"] == "xxxxx"
    assert printed["tags"] == ["a"]


def test_print_rejects_non_object(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "list.json"
    _ = path.write_text("[1, 2]")
    assert main(["print", str(path)]) == 1
    assert "expected a JSON object" in capsys.readouterr().err


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 0
    assert "usage: mapstr" in capsys.readouterr().out


def test_version() -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])
    assert excinfo.value.code == 0

import json

import pytest

from avro_payload_validator.cli import find_payload_files, main


@pytest.fixture
def schema_file(tmp_path, pet_owner_declaration):
    path = tmp_path / "pet_owner.avsc"
    path.write_text(json.dumps(pet_owner_declaration), encoding="utf-8")
    return path


@pytest.fixture
def payload_dir(tmp_path):
    directory = tmp_path / "payloads"
    directory.mkdir()
    return directory


def _run(argv):
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code


def test_valid_payload_exits_zero(schema_file, payload_dir, capsys):
    payload = payload_dir / "ok.json"
    payload.write_text('{"name": "John Doe", "pets": [{"kind": "DOG", "name": "Buddy"}]}', encoding="utf-8")

    assert _run([str(schema_file), str(payload)]) == 0
    assert "Validated 1 payload file(s) with no errors." in capsys.readouterr().out


def test_human_output_lists_errors_with_lines(schema_file, payload_dir, capsys):
    payload = payload_dir / "bad.yaml"
    payload.write_text("name: John Doe\npets:\n  - kind: DOG\n    name: 123\n", encoding="utf-8")

    assert _run([str(schema_file), str(payload)]) == 1
    out = capsys.readouterr().out
    assert f"{payload}:" in out
    assert "  ERROR:4: Invalid type for field 'pets[0].name', expected: \"string\", received: number" in out


def test_json_output(schema_file, payload_dir, capsys):
    (payload_dir / "a.yaml").write_text("pets:\n  - name: Rex\n", encoding="utf-8")
    (payload_dir / "b.json").write_text('{"name": "x", "pets": []}', encoding="utf-8")

    assert _run([str(schema_file), str(payload_dir), "--format", "json"]) == 1
    output = json.loads(capsys.readouterr().out)
    assert output["files"] == 2
    assert output["errors"] == 2

    first = output["results"][0]
    assert first["file"].endswith("a.yaml")
    assert [e["message"] for e in first["errors"]] == [
        "Missing required field: 'name'",
        "Missing required field: 'pets[0].kind'",
    ]
    assert first["errors"][1]["path"] == "pets[0].kind"
    assert first["errors"][1]["line"] == 2
    assert first["errors"][1]["code"] == "missing_required"
    assert output["results"][1]["errors"] == []


def test_github_actions_output(schema_file, payload_dir, capsys):
    payload = payload_dir / "bad.json"
    payload.write_text('{"pets": []}', encoding="utf-8")

    assert _run([str(schema_file), str(payload), "--format", "github-actions"]) == 1
    assert f"::error file={payload},line=1::Missing required field: 'name'" in capsys.readouterr().out


def test_strict_flag_reports_unknown_fields(schema_file, payload_dir, capsys):
    payload = payload_dir / "extra.json"
    payload.write_text('{"name": "x", "pets": [], "nickname": "y"}', encoding="utf-8")

    assert _run([str(schema_file), str(payload)]) == 0
    capsys.readouterr()
    assert _run([str(schema_file), str(payload), "--strict"]) == 1
    assert "Unknown field: 'nickname'" in capsys.readouterr().out


def test_non_mapping_payload_is_reported(schema_file, payload_dir, capsys):
    payload = payload_dir / "list.yaml"
    payload.write_text("- 1\n- 2\n", encoding="utf-8")

    assert _run([str(schema_file), str(payload)]) == 1
    assert "Failed to validate payload" in capsys.readouterr().out


def test_invalid_schema_exits_two(tmp_path, payload_dir, capsys):
    schema = tmp_path / "bad.avsc"
    schema.write_text('{"type": "record", "name": "R", "fields": [{"name": "a", "type": "Nope"}]}', encoding="utf-8")
    payload = payload_dir / "p.json"
    payload.write_text("{}", encoding="utf-8")

    assert _run([str(schema), str(payload)]) == 2
    assert "Unknown type reference 'Nope'" in capsys.readouterr().err


def test_no_payload_files(schema_file, payload_dir, capsys):
    assert _run([str(schema_file), str(payload_dir)]) == 1
    assert "No payload files found." in capsys.readouterr().err


def test_find_payload_files(payload_dir):
    (payload_dir / "a.json").write_text("{}", encoding="utf-8")
    nested = payload_dir / "nested"
    nested.mkdir()
    (nested / "b.yml").write_text("{}", encoding="utf-8")
    (nested / "notes.txt").write_text("", encoding="utf-8")

    found = find_payload_files([str(payload_dir), str(payload_dir / "missing.json")])
    assert [p.name for p in found] == ["a.json", "b.yml"]

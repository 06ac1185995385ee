"""
Tests for the command-line interface.
"""

import json

import pytest
import yaml

from conftest import make_document, schema_ref
from openapi_typegen.cli import CLIError, _parse_name_overrides, create_parser, main


@pytest.fixture
def document_file(tmp_path, pets_document):
    path = tmp_path / "openapi.yaml"
    path.write_text(yaml.safe_dump(pets_document), encoding="utf-8")
    return path


# -----------------------------------------------------------------------------
# Argument parsing
# -----------------------------------------------------------------------------
def test_parser_options():
    args = create_parser().parse_args(
        [
            "openapi.yaml",
            "-l",
            "py",
            "--naming-strategy",
            "idiomatic",
            "--name-override",
            "a=B",
            "--name-override",
            "c=D",
            "--no-operations",
            "--detect-collisions",
        ]
    )

    assert args.file == "openapi.yaml"
    assert args.language == "py"
    assert args.naming_strategy == "idiomatic"
    assert args.name_override == ["a=B", "c=D"]
    assert args.no_operations is True
    assert args.detect_collisions is True


def test_parser_rejects_unknown_strategy():
    with pytest.raises(SystemExit):
        create_parser().parse_args(["openapi.yaml", "--naming-strategy", "shouty"])


def test_parse_name_overrides():
    assert _parse_name_overrides(["3rd-party=ThirdParty", "a=b=c"]) == {
        "3rd-party": "ThirdParty",
        "a": "b=c",
    }
    with pytest.raises(CLIError):
        _parse_name_overrides(["missing-separator"])


# -----------------------------------------------------------------------------
# Runs
# -----------------------------------------------------------------------------
def test_main_writes_summary(document_file, tmp_path):
    output = tmp_path / "summary.json"

    exit_code = main([str(document_file), "--output", str(output)])

    assert exit_code == 0
    summary = json.loads(output.read_text(encoding="utf-8"))
    assert summary["metadata"]["language"] == "swift"
    names = [declaration["name"] for declaration in summary["declarations"]]
    assert "Components.Schemas.Pet" in names
    assert "Operations.listPets" in names
    pet = summary["declarations"][names.index("Components.Schemas.Pet")]
    assert {"name": "tag", "original_name": "tag", "type": "Swift.String?"} in pet["members"]


def test_main_python_alias_and_no_operations(document_file, tmp_path):
    output = tmp_path / "summary.json"

    exit_code = main([str(document_file), "-l", "py", "--no-operations", "-o", str(output)])

    assert exit_code == 0
    summary = json.loads(output.read_text(encoding="utf-8"))
    assert summary["metadata"]["naming_strategy"] == "idiomatic"
    assert not any(d["name"].startswith("Operations.") for d in summary["declarations"])


def test_main_reports_recursion_failure(tmp_path):
    path = tmp_path / "cycle.json"
    path.write_text(
        json.dumps(make_document({"A": schema_ref("B"), "B": schema_ref("A")})),
        encoding="utf-8",
    )

    assert main([str(path)]) == 1


def test_main_list_languages():
    assert main(["--list-languages"]) == 0


def test_main_requires_input():
    assert main([]) == 1


def test_main_missing_file(tmp_path):
    assert main([str(tmp_path / "missing.yaml")]) == 1


def test_main_unknown_language(document_file):
    assert main([str(document_file), "--language", "kotlin"]) == 1

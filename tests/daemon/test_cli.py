"""
Unit tests for the userprofile CLI.

Tests validate, compile and contexts commands with click's CliRunner.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from userprofile_library.services.provider_factory import ProfileProviderFactory
from userprofiled.cli import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def document(temp_storage_dir: Path, sample_document: str) -> Path:
    path = temp_storage_dir / "profile.yaml"
    path.write_text(sample_document)
    return path


@pytest.fixture
def invalid_document(temp_storage_dir: Path) -> Path:
    path = temp_storage_dir / "invalid.yaml"
    path.write_text("attributes:\n  - name: nickname\n    validations:\n      nope: {}\n    group: missing\n")
    return path


@pytest.mark.unit
class TestValidateCommand:
    """Test `userprofile validate`."""

    def test_valid_document(self, runner: CliRunner, document: Path) -> None:
        result = runner.invoke(cli, ["validate", str(document)])

        assert result.exit_code == 0
        assert "valid (4 attributes, 1 groups)" in result.output

    def test_invalid_document_lists_every_problem(self, runner: CliRunner, invalid_document: Path) -> None:
        result = runner.invoke(cli, ["validate", str(invalid_document)])

        assert result.exit_code == 1
        assert "2 problem(s) found" in result.output
        assert "attributes.nickname.validations.nope" in result.output
        assert "attributes.nickname.group" in result.output

    def test_malformed_document(self, runner: CliRunner, temp_storage_dir: Path) -> None:
        path = temp_storage_dir / "broken.yaml"
        path.write_text("attributes: [")

        result = runner.invoke(cli, ["validate", str(path)])

        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_missing_file(self, runner: CliRunner, temp_storage_dir: Path) -> None:
        result = runner.invoke(cli, ["validate", str(temp_storage_dir / "missing.yaml")])
        assert result.exit_code == 2


@pytest.mark.unit
@pytest.mark.usefixtures("mock_storage_env")
class TestCompileCommand:
    """Test `userprofile compile`."""

    def test_prints_metadata_json(self, runner: CliRunner, document: Path) -> None:
        result = runner.invoke(cli, ["compile", str(document), "--context", "account"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["contextId"] == "account"
        assert [a["name"] for a in data["attributes"]] == ["username", "email", "nickname", "locale"]

    def test_identifier_from_contact_flag_keeps_predicates(self, runner: CliRunner, document: Path) -> None:
        result = runner.invoke(cli, ["compile", str(document), "--context", "account", "--identifier-from-contact"])

        data = json.loads(result.output)
        username = data["attributes"][0]
        assert username["required"] == {
            "kind": "not",
            "operand": {"kind": "realm-flag", "flag": "identifier_synthesized_from_contact"},
        }

    def test_unknown_context(self, runner: CliRunner, document: Path) -> None:
        result = runner.invoke(cli, ["compile", str(document), "--context", "nowhere"])

        assert result.exit_code == 1
        assert "nowhere" in result.output

    def test_invalid_document(self, runner: CliRunner, invalid_document: Path) -> None:
        result = runner.invoke(cli, ["compile", str(invalid_document), "--context", "account"])

        assert result.exit_code == 1
        assert "2 problem(s) found" in result.output

    def test_realm_defaults_to_configured_realm(
        self, runner: CliRunner, document: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("USERPROFILE_DEFAULT_REALM", "tenant")

        with patch.object(
            ProfileProviderFactory, "create", autospec=True, side_effect=ProfileProviderFactory.create
        ) as create_spy:
            result = runner.invoke(cli, ["compile", str(document), "--context", "account"])

        assert result.exit_code == 0
        assert create_spy.call_args.args[1] == "tenant"

    def test_realm_option_wins(self, runner: CliRunner, document: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("USERPROFILE_DEFAULT_REALM", "tenant")

        with patch.object(
            ProfileProviderFactory, "create", autospec=True, side_effect=ProfileProviderFactory.create
        ) as create_spy:
            runner.invoke(cli, ["compile", str(document), "--context", "account", "--realm", "other"])

        assert create_spy.call_args.args[1] == "other"


@pytest.mark.unit
class TestContextsCommand:
    """Test `userprofile contexts`."""

    def test_lists_all_contexts(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["contexts"])

        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert len(lines) == 6
        assert lines[-1].startswith("update-email")
        assert "attributes=email" in lines[-1]
        assert "roles=admin" in lines[4]

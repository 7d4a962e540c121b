"""
Command-line tests.
"""

import json

import base58
import pytest

import vapor.cli as cli_mod
from vapor.address import validate_vapor_address
from vapor.cli import main
from vapor.errors import AddressGenerationFailed


class TestGenerate:

    def test_json_output(self, capsys, zero_recipient):
        assert main(["generate", zero_recipient, "--json"]) == 0
        out = json.loads(capsys.readouterr().out)
        assert out["recipient"] == zero_recipient
        assert out["secretHex"].startswith("0x")
        assert validate_vapor_address(out["address"])

    def test_text_output(self, capsys, recipient):
        assert main(["generate", recipient]) == 0
        out = capsys.readouterr().out
        assert "Vapor address:" in out
        assert "Secret:" in out

    def test_invalid_recipient(self, capsys):
        short = base58.b58encode(bytes(31)).decode("ascii")
        assert main(["generate", short]) == 2
        assert "error" in capsys.readouterr().err

    def test_bad_config(self, capsys, tmp_path, zero_recipient):
        path = tmp_path / "bad.json"
        path.write_text('{"deriver": {"max_attempts": 0}}')
        assert main(["--config", str(path), "generate", zero_recipient]) == 2


class TestValidate:

    def test_valid(self, capsys, vapor_result):
        assert main(["validate", vapor_result.address]) == 0
        assert capsys.readouterr().out.strip() == "valid"

    def test_invalid(self, capsys):
        assert main(["validate", "0OIl"]) == 1
        assert capsys.readouterr().out.strip() == "invalid"


class TestArguments:

    @pytest.mark.parametrize("value", ["0", "-1", "many"])
    def test_max_attempts_must_be_positive(self, capsys, zero_recipient, value):
        with pytest.raises(SystemExit) as exc:
            main(["generate", zero_recipient, "--max-attempts", value])
        assert exc.value.code == 2
        assert "--max-attempts" in capsys.readouterr().err

    def test_explicit_max_attempts_used(self, monkeypatch, capsys, zero_recipient):
        seen = []

        def fake_generate(recipient, max_attempts):
            seen.append(max_attempts)
            raise AddressGenerationFailed(max_attempts)

        monkeypatch.setattr(cli_mod, "generate_vapor_address", fake_generate)
        assert main(["generate", zero_recipient, "--max-attempts", "1"]) == 1
        assert seen == [1]

    def test_config_max_attempts_is_fallback(self, monkeypatch, capsys, tmp_path, zero_recipient):
        path = tmp_path / "vapor.json"
        path.write_text('{"deriver": {"max_attempts": 7}}')
        seen = []

        def fake_generate(recipient, max_attempts):
            seen.append(max_attempts)
            raise AddressGenerationFailed(max_attempts)

        monkeypatch.setattr(cli_mod, "generate_vapor_address", fake_generate)
        assert main(["--config", str(path), "generate", zero_recipient]) == 1
        assert seen == [7]


class TestConfigErrors:

    def test_missing_file(self, capsys, tmp_path, zero_recipient):
        path = tmp_path / "absent.json"
        assert main(["--config", str(path), "generate", zero_recipient]) == 2
        assert "config error" in capsys.readouterr().err

    @pytest.mark.parametrize("content", [
        '{"deriver": {"max_attempts": 5, "retries": 3}}',
        '{"deriver": 5}',
        '{"deriver": {"max_attempts": "ten"}}',
        '{"log": {"level": 10}}',
        '["deriver"]',
        '{not json',
    ])
    def test_malformed_file(self, capsys, tmp_path, zero_recipient, content):
        path = tmp_path / "vapor.json"
        path.write_text(content)
        assert main(["--config", str(path), "generate", zero_recipient]) == 2
        assert "config error" in capsys.readouterr().err

    def test_unknown_log_level(self, capsys, vapor_result):
        assert main(["--log-level", "loud", "validate", vapor_result.address]) == 2
        assert "config error" in capsys.readouterr().err

"""
Tests for the octocov-config command line.
"""

import json

import yaml

from octocov_config.__main__ import build_arg_parser, main


class TestArgParser:
    """Test argument parsing."""

    def test_defaults(self):
        """Test default arguments."""
        args = build_arg_parser().parse_args([])
        assert args.config == ""
        assert args.wd is None
        assert args.coverage is None
        assert args.datastore is False
        assert args.format == "json"

    def test_config_from_environment(self, monkeypatch):
        """Test that OCTOCOV_CONFIG provides the default config path."""
        monkeypatch.setenv("OCTOCOV_CONFIG", "ci/octocov.yml")
        assert build_arg_parser().parse_args([]).config == "ci/octocov.yml"


class TestMain:
    """Test running the command line."""

    def test_no_config_file(self, tmp_path, capsys):
        """Test output when no config file exists."""
        assert main(["--wd", str(tmp_path)]) == 0

        output = json.loads(capsys.readouterr().out)
        assert output["summary"]["loaded"] is False
        assert output["config"]["coverage"]["path"] == str(tmp_path)

    def test_grades_values(self, tmp_path, capsys):
        """Test coverage and ratio grading."""
        assert main(["--wd", str(tmp_path), "--coverage", "85", "--ratio", "0.7"]) == 0

        output = json.loads(capsys.readouterr().out)
        assert output["coverage"] == {"value": 85.0, "band": "green", "color": "#97CA00"}
        assert output["code_to_test_ratio"]["band"] == "orange"

    def test_acceptance_failure(self, tmp_path, write_config, capsys):
        """Test that coverage below the threshold fails."""
        write_config("coverage:\n  acceptable: 90%\n")

        assert main(["--wd", str(tmp_path), "--coverage", "85"]) == 1
        assert "below the accepted 90.0%" in capsys.readouterr().err

    def test_duplicate_config(self, tmp_path, write_config, capsys):
        """Test that ambiguous config files fail."""
        write_config("", name=".octocov.yml")
        write_config("", name="octocov.yml")

        assert main(["--wd", str(tmp_path)]) == 1
        assert "duplicate config file" in capsys.readouterr().err

    def test_malformed_config(self, tmp_path, write_config, capsys):
        """Test that a YAML error fails without a traceback."""
        write_config("coverage: [\n")

        assert main(["--wd", str(tmp_path)]) == 1
        assert "Traceback" not in capsys.readouterr().err

    def test_datastore(self, tmp_path, write_config, capsys, monkeypatch):
        """Test datastore gating and validation."""
        write_config(
            """
            repository: acme/widgets
            datastore:
              if: env.OCTOCOV_STORE == 'yes'
              github:
                repository: acme/reports
            """,
        )
        monkeypatch.setenv("OCTOCOV_STORE", "yes")

        assert main(["--wd", str(tmp_path), "--datastore"]) == 0

        output = json.loads(capsys.readouterr().out)
        assert output["datastore"]["ready"] is True
        assert output["datastore"]["github"] == {
            "repository": "acme/reports",
            "branch": "main",
            "path": "reports/acme/widgets/report.json",
        }

    def test_datastore_skipped(self, tmp_path, write_config, capsys):
        """Test that an unmet condition skips validation."""
        write_config("datastore:\n  if: 'false'\n")

        assert main(["--wd", str(tmp_path), "--datastore"]) == 0
        assert json.loads(capsys.readouterr().out)["datastore"] == {"ready": False}

    def test_datastore_invalid(self, tmp_path, write_config, capsys):
        """Test that an invalid datastore section fails."""
        write_config("repository: acme/widgets\ndatastore:\n  github:\n    repository: nope\n")

        assert main(["--wd", str(tmp_path), "--datastore"]) == 1
        assert "should be 'owner/repo'" in capsys.readouterr().err

    def test_yaml_output(self, tmp_path, capsys):
        """Test YAML output."""
        assert main(["--wd", str(tmp_path), "--format", "yaml"]) == 0
        output = yaml.safe_load(capsys.readouterr().out)
        assert output["summary"]["wd"] == str(tmp_path)

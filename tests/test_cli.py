# ============================================================================
# ReportDesk - CLI Tests
#
# Purpose: Test the command line interface end to end
# Inputs: Temporary config, directory snapshot and instance files
# Outputs: Test pass/fail
# Dependencies: pytest, ReportDesk.cli
# Usage: pytest tests/test_cli.py -v
#
# Changelog:
#   2026-10-09: Initial CLI tests (route, new, render, submit)
#   2026-10-12: Directory snapshots and record updates
# ============================================================================

import json

import pytest

from ReportDesk.cli import create_parser, main


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "logging:\n"
        "  level: WARNING\n"
        "store:\n"
        "  type: local_file\n"
        f"  output_dir: {tmp_path / 'reports'}\n",
        encoding="utf-8",
    )
    return str(path)


def _generic_instance(tmp_path, **overrides) -> str:
    data = {"template": "generic", "title": "Facilities Weekly Update", "content": "Generator serviced."}
    data.update(overrides)
    path = tmp_path / "instance.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


class TestParser:
    def test_no_command(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out.lower()

    def test_submit_arguments(self):
        args = create_parser().parse_args(["submit", "draft.json", "--report-id", "4"])
        assert args.instance == "draft.json"
        assert args.report_id == "4"


class TestRouteCommand:
    def test_prints_tag_label_and_mode(self, config_path, capsys):
        code = main(["--config", config_path, "route", "--department", "Finance"])
        assert code == 0
        assert capsys.readouterr().out.strip() == "finance\tFinance Department Report\ttext"

    def test_hint(self, config_path, capsys):
        main(["--config", config_path, "route", "--department", "Marketing", "--hint", "client-specific-activities"])
        assert capsys.readouterr().out.startswith("marketing-client-activities\t")


class TestNewCommand:
    def test_prints_instance(self, config_path, capsys):
        code = main(
            ["--config", config_path, "new", "--department", "ICT", "--user", "Kwame", "--date", "2026-10-21"]
        )
        data = json.loads(capsys.readouterr().out)
        assert code == 0
        assert data["template"] == "ict-weekly"
        assert data["weekEnding"] == "2026-10-18"
        assert data["preparedBy"] == "Kwame"

    def test_out_file_with_directory(self, config_path, tmp_path, capsys):
        snapshot = tmp_path / "directory.json"
        snapshot.write_text(json.dumps({"staff": [{"id": 1, "name": "Kofi Boateng"}]}), encoding="utf-8")
        out = tmp_path / "draft.json"

        code = main(
            [
                "--config",
                config_path,
                "new",
                "--department",
                "Marketing",
                "--directory",
                str(snapshot),
                "--out",
                str(out),
            ]
        )

        assert code == 0
        assert "Draft written" in capsys.readouterr().out
        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["staffPerformance"][0]["staffName"] == "Kofi Boateng"

    def test_invalid_date(self, config_path, capsys):
        code = main(["--config", config_path, "new", "--department", "Finance", "--date", "18/10/2026"])
        assert code == 1
        assert "Invalid date" in capsys.readouterr().err


class TestRenderCommand:
    def test_generic_verbatim(self, config_path, tmp_path, capsys):
        main(["--config", config_path, "render", _generic_instance(tmp_path)])
        assert capsys.readouterr().out == "Generator serviced.\n"

    def test_json_mode(self, config_path, tmp_path, capsys):
        main(["--config", config_path, "render", _generic_instance(tmp_path), "--mode", "json"])
        assert json.loads(capsys.readouterr().out)["template"] == "generic"

    def test_unreadable_instance(self, config_path, tmp_path, capsys):
        bad = tmp_path / "bad.json"
        bad.write_text("not json", encoding="utf-8")
        assert main(["--config", config_path, "render", str(bad)]) == 1
        assert "is not a report instance" in capsys.readouterr().err


class TestSubmitCommand:
    def test_creates_record(self, config_path, tmp_path, capsys):
        code = main(["--config", config_path, "submit", _generic_instance(tmp_path)])
        assert code == 0
        assert "Stored report 1: Facilities Weekly Update" in capsys.readouterr().out
        record = json.loads((tmp_path / "reports" / "report_1.json").read_text(encoding="utf-8"))
        assert record["content"] == "Generator serviced."

    def test_updates_existing_record(self, config_path, tmp_path, capsys):
        main(["--config", config_path, "submit", _generic_instance(tmp_path)])
        instance = _generic_instance(tmp_path, content="Generator replaced.")
        code = main(["--config", config_path, "submit", instance, "--report-id", "1"])
        assert code == 0
        record = json.loads((tmp_path / "reports" / "report_1.json").read_text(encoding="utf-8"))
        assert record["content"] == "Generator replaced."
        assert not (tmp_path / "reports" / "report_2.json").exists()

    def test_missing_fields_rejected(self, config_path, tmp_path, capsys):
        draft = tmp_path / "finance.json"
        main(["--config", config_path, "new", "--department", "Finance", "--out", str(draft)])
        capsys.readouterr()

        code = main(["--config", config_path, "submit", str(draft)])

        assert code == 1
        assert "required field(s) missing" in capsys.readouterr().err
        assert not (tmp_path / "reports" / "report_1.json").exists()

    def test_unknown_record(self, config_path, tmp_path, capsys):
        code = main(["--config", config_path, "submit", _generic_instance(tmp_path), "--report-id", "9"])
        assert code == 1
        assert "Report 9 not found" in capsys.readouterr().err

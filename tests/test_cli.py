"""Unit tests for careerdesk.cli — CLI command parsing and execution."""

import argparse
import json
import subprocess
from unittest.mock import MagicMock, patch

import pytest

import careerdesk.cli as cli_mod


@pytest.fixture
def jobs_file(tmp_path, jobs):
    path = tmp_path / "jobs.json"
    path.write_text(json.dumps(jobs), encoding="utf-8")
    return path


class TestCLIParsing:
    def test_no_command_prints_help(self, capsys):
        assert cli_mod.main([]) == 0
        assert "usage: careerdesk" in capsys.readouterr().out

    def test_module_has_expected_commands(self):
        assert hasattr(cli_mod, "cmd_run")
        assert hasattr(cli_mod, "cmd_check")
        assert hasattr(cli_mod, "cmd_preview")


class TestCmdRun:
    def test_invokes_reflex(self):
        with patch("subprocess.run", return_value=MagicMock(returncode=0)) as run:
            assert cli_mod.main(["run", "--port", "3100"]) == 0
        cmd = run.call_args[0][0]
        assert cmd[:2] == ["reflex", "run"]
        assert "3100" in cmd

    def test_reflex_missing(self, capsys):
        with patch("subprocess.run", side_effect=FileNotFoundError):
            assert cli_mod.main(["run"]) == 1
        assert "not found" in capsys.readouterr().out

    def test_reflex_failure_exit_code(self):
        with patch("subprocess.run", side_effect=subprocess.CalledProcessError(3, ["reflex"])):
            assert cli_mod.main(["run"]) == 3


class TestCmdCheck:
    def test_valid_config(self, project_root, capsys):
        code = cli_mod.main(["check", "--config", str(project_root / "careerdesk.yaml")])
        out = capsys.readouterr().out
        assert code == 0
        assert "[OK] TestDesk v2.0.0 (staging)" in out
        assert "admin_jobs" in out
        assert "/dashboard/applied" in out

    def test_invalid_config(self, tmp_path, capsys):
        path = tmp_path / "careerdesk.yaml"
        path.write_text("platform:\n  environment: qa\n", encoding="utf-8")
        assert cli_mod.cmd_check(argparse.Namespace(config=str(path))) == 1
        assert "[FAIL]" in capsys.readouterr().out


class TestCmdPreview:
    def test_search_and_sort(self, jobs_file, capsys):
        code = cli_mod.main([
            "preview", str(jobs_file), "--key-field", "job_id",
            "--keys", "title,status", "--search", "engineer", "--sort", "title:desc",
        ])
        out = capsys.readouterr().out
        assert code == 0
        lines = out.splitlines()
        assert lines[0].split() == ["#", "Title", "Status"]
        assert "Frontend Engineer" in lines[2]
        assert "Backend Engineer" in lines[3]
        assert "Page 1 of 1 (2 matching, 5 total)" in out

    def test_filters_and_paging(self, jobs_file, capsys):
        code = cli_mod.main([
            "preview", str(jobs_file), "--key-field", "job_id", "--keys", "title",
            "--filter", "status=OPEN", "--page-size", "2", "--page", "2",
        ])
        out = capsys.readouterr().out
        assert code == 0
        assert "Contract Recruiter" in out
        assert "Backend Engineer" not in out
        assert "Page 2 of 2 (3 matching, 5 total)" in out

    def test_screen_table_columns(self, jobs_file, capsys):
        assert cli_mod.main(["preview", str(jobs_file), "--table", "admin_jobs"]) == 0
        out = capsys.readouterr().out
        assert "Job Details" in out
        assert "Full-Time" in out

    def test_yaml_file(self, tmp_path, capsys):
        path = tmp_path / "people.yaml"
        path.write_text("- id: 1\n  name: Ada\n- id: 2\n  name: Grace\n", encoding="utf-8")
        assert cli_mod.main(["preview", str(path), "--search", "gra"]) == 0
        out = capsys.readouterr().out
        assert "Grace" in out
        assert "Ada" not in out

    def test_no_matches(self, jobs_file, capsys):
        assert cli_mod.main(["preview", str(jobs_file), "--search", "astronaut"]) == 0
        assert "No data found" in capsys.readouterr().out

    def test_missing_file(self, tmp_path, capsys):
        assert cli_mod.main(["preview", str(tmp_path / "nope.json")]) == 1

    def test_bad_filter(self, jobs_file, capsys):
        assert cli_mod.main(["preview", str(jobs_file), "--filter", "status"]) == 1
        assert "KEY=VALUE" in capsys.readouterr().out

    def test_unknown_table(self, jobs_file, capsys):
        assert cli_mod.main(["preview", str(jobs_file), "--table", "ghost"]) == 1
        assert "Unknown table" in capsys.readouterr().out

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "obj.json"
        path.write_text('{"id": 1}', encoding="utf-8")
        assert cli_mod.main(["preview", str(path)]) == 1

    def test_sort_direction_must_be_asc_or_desc(self, jobs_file, capsys):
        assert cli_mod.main(["preview", str(jobs_file), "--key-field", "job_id", "--sort", "title:bogus"]) == 1
        assert "KEY:desc" in capsys.readouterr().out

    def test_explicit_ascending_sort(self, jobs_file, capsys):
        code = cli_mod.main([
            "preview", str(jobs_file), "--key-field", "job_id", "--keys", "title", "--sort", "title:asc",
        ])
        assert code == 0
        lines = capsys.readouterr().out.splitlines()
        assert "Backend Engineer" in lines[2]

    def test_page_zero_is_empty(self, jobs_file, capsys):
        assert cli_mod.main(["preview", str(jobs_file), "--key-field", "job_id", "--page", "0"]) == 0
        assert "No data found" in capsys.readouterr().out


class TestCmdLogs:
    @pytest.fixture
    def log_config(self, tmp_path):
        log_dir = tmp_path / "logs"
        path = tmp_path / "careerdesk.yaml"
        path.write_text(f"logging:\n  directory: {log_dir}\n", encoding="utf-8")
        return path, log_dir

    def test_shows_entries_newest_first(self, log_config, capsys):
        from careerdesk.engine.logging import FileLogger, log_table_interaction

        path, log_dir = log_config
        file_logger = FileLogger(log_dir=str(log_dir))
        file_logger.write(log_table_interaction("admin_jobs", "search", search_term="eng"))
        file_logger.write(log_table_interaction("job_board", "page", page=2))
        file_logger.write(log_table_interaction("admin_jobs", "sort", sort_key="title"))

        assert cli_mod.main(["logs", "--config", str(path), "--table", "admin_jobs"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 2
        assert "sort" in lines[0]
        assert "search" in lines[1]
        assert "job_board" not in "\n".join(lines)

    def test_delete_entries(self, log_config, capsys):
        from careerdesk.engine.logging import FileLogger, log_table_delete

        path, log_dir = log_config
        FileLogger(log_dir=str(log_dir)).write(log_table_delete("admin_companies", 42))
        assert cli_mod.main(["logs", "--config", str(path), "--category", "security"]) == 0
        assert "delete 42" in capsys.readouterr().out

    def test_no_entries(self, log_config, capsys):
        path, _ = log_config
        assert cli_mod.main(["logs", "--config", str(path)]) == 0
        assert "No log entries found" in capsys.readouterr().out

    def test_unknown_target(self, log_config, capsys):
        path, _ = log_config
        assert cli_mod.main(["logs", "--config", str(path), "--type", "system"]) == 1
        assert "Unknown log target" in capsys.readouterr().out

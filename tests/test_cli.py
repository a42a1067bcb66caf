"""Tests for the CLI commands."""

import json
from pathlib import Path

from typer.testing import CliRunner

from ngmodernize import __version__
from ngmodernize.cli import app
from ngmodernize.config.loader import CONFIG_FILENAME
from ngmodernize.files.writer import BACKUP_DIRNAME

runner = CliRunner()


def _json(output: str) -> dict:
    # Log lines go to stderr and may precede the report.
    return json.loads(output[output.index("{\n"):])


def _read(root: Path, rel: str) -> str:
    return (root / rel).read_text(encoding="utf-8")


class TestVersion:
    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"ngmodernize {__version__}" in result.output


class TestInit:
    def test_creates_config(self, tmp_path: Path):
        result = runner.invoke(app, ["init", "--path", str(tmp_path)])
        assert result.exit_code == 0
        assert "[migration]" in _read(tmp_path, CONFIG_FILENAME)

    def test_refuses_overwrite(self, tmp_path: Path):
        (tmp_path / CONFIG_FILENAME).write_text("existing")
        result = runner.invoke(app, ["init", "--path", str(tmp_path)])
        assert result.exit_code == 1
        assert _read(tmp_path, CONFIG_FILENAME) == "existing"


class TestAnalyze:
    def test_json_output(self, angular_project: Path):
        before = _read(angular_project, "src/app/user.component.ts")
        result = runner.invoke(app, ["analyze", "--path", str(angular_project), "--format", "json"])
        assert result.exit_code == 0
        data = _json(result.output)
        assert data["mode"] == "analyze"
        assert data["summary"]["total_issues"] == 23
        assert data["backend"] == "unknown"
        assert _read(angular_project, "src/app/user.component.ts") == before

    def test_terminal_output(self, angular_project: Path):
        result = runner.invoke(app, ["analyze", "--path", str(angular_project)])
        assert result.exit_code == 0
        assert "Migration Issues" in result.output
        assert "Recommendations" in result.output

    def test_writes_reports(self, angular_project: Path):
        result = runner.invoke(app, ["analyze", "--path", str(angular_project), "--report"])
        assert result.exit_code == 0
        written = sorted(p.suffix for p in (angular_project / "migration-reports").iterdir())
        assert written == [".html", ".json", ".md"]

    def test_config_file_is_used(self, angular_project: Path):
        (angular_project / CONFIG_FILENAME).write_text('[rules]\ndisable = ["LEGACY_NG_IF"]\n')
        result = runner.invoke(app, ["analyze", "--path", str(angular_project), "-f", "json"])
        rules = {i["rule"] for f in _json(result.output)["files"] for i in f["issues"]}
        assert "LEGACY_NG_IF" not in rules

    def test_missing_project(self, tmp_path: Path):
        result = runner.invoke(app, ["analyze", "--path", str(tmp_path / "missing")])
        assert result.exit_code == 1
        assert "Error" in result.output


class TestMigrate:
    def test_auto_apply(self, angular_project: Path):
        result = runner.invoke(app, ["migrate", "--path", str(angular_project), "--auto-apply"])
        assert result.exit_code == 0
        assert "inject(UserService)" in _read(angular_project, "src/app/user.component.ts")
        assert (angular_project / BACKUP_DIRNAME).is_dir()

    def test_no_backup(self, angular_project: Path):
        result = runner.invoke(
            app, ["migrate", "--path", str(angular_project), "--auto-apply", "--no-backup"]
        )
        assert result.exit_code == 0
        assert not (angular_project / BACKUP_DIRNAME).exists()

    def test_per_file_confirmation(self, angular_project: Path):
        before = _read(angular_project, "package.json")
        result = runner.invoke(
            app,
            ["migrate", "--path", str(angular_project), "--format", "json"],
            input="n\n" * 4,
        )
        assert result.exit_code == 0
        assert result.output.count("Apply changes to") == 4
        assert _read(angular_project, "package.json") == before
        assert _json(result.output)["summary"]["skipped_transformations"] == 9

    def test_dry_run_shows_diff(self, angular_project: Path):
        before = _read(angular_project, "src/app/user.service.ts")
        result = runner.invoke(app, ["migrate", "--path", str(angular_project), "--mode", "dry-run"])
        assert result.exit_code == 0
        assert "@@" in result.output
        assert _read(angular_project, "src/app/user.service.ts") == before

    def test_exclude(self, angular_project: Path):
        template = _read(angular_project, "src/app/user.component.html")
        result = runner.invoke(
            app,
            ["migrate", "--path", str(angular_project), "--auto-apply", "--exclude", ".html"],
        )
        assert result.exit_code == 0
        assert _read(angular_project, "src/app/user.component.html") == template
        assert "@angular/http" not in _read(angular_project, "package.json")


class TestExitCodes:
    def test_bad_mode(self, angular_project: Path):
        result = runner.invoke(app, ["migrate", "--path", str(angular_project), "--mode", "upgrade"])
        assert result.exit_code == 1
        assert "Config error" in result.output

    def test_bad_format(self, angular_project: Path):
        result = runner.invoke(app, ["analyze", "--path", str(angular_project), "--format", "pdf"])
        assert result.exit_code == 1

    def test_conflicting_patterns(self, angular_project: Path):
        result = runner.invoke(
            app,
            ["migrate", "--path", str(angular_project), "--include", "src", "--exclude", "src"],
        )
        assert result.exit_code == 1

    def test_invalid_custom_rule(self, angular_project: Path):
        rules_dir = angular_project / ".ngmodernize-rules"
        rules_dir.mkdir()
        (rules_dir / "bad.yaml").write_text("- pattern: x\n")
        result = runner.invoke(app, ["analyze", "--path", str(angular_project)])
        assert result.exit_code == 1


class TestRollback:
    def test_restores_after_migrate(self, angular_project: Path):
        before = _read(angular_project, "src/app/user.component.ts")
        runner.invoke(app, ["migrate", "--path", str(angular_project), "--auto-apply"])
        assert _read(angular_project, "src/app/user.component.ts") != before

        result = runner.invoke(app, ["rollback", "--path", str(angular_project)])
        assert result.exit_code == 0
        assert "Restored 4 file(s)" in result.output
        assert _read(angular_project, "src/app/user.component.ts") == before

    def test_list_and_named_backup(self, angular_project: Path):
        runner.invoke(app, ["migrate", "--path", str(angular_project), "--auto-apply"])
        (stamp,) = [p.name for p in (angular_project / BACKUP_DIRNAME).iterdir()]

        listed = runner.invoke(app, ["rollback", "--path", str(angular_project), "--list"])
        assert listed.exit_code == 0
        assert stamp in listed.output

        result = runner.invoke(app, ["rollback", "--path", str(angular_project), "--backup", stamp])
        assert result.exit_code == 0
        assert stamp in result.output

    def test_unknown_backup(self, angular_project: Path):
        runner.invoke(app, ["migrate", "--path", str(angular_project), "--auto-apply"])
        result = runner.invoke(
            app, ["rollback", "--path", str(angular_project), "--backup", "19990101-000000"]
        )
        assert result.exit_code == 1
        assert "Unknown backup" in result.output

    def test_no_backups(self, angular_project: Path):
        result = runner.invoke(app, ["rollback", "--path", str(angular_project)])
        assert result.exit_code == 1
        assert "No backups found" in result.output
        listed = runner.invoke(app, ["rollback", "--path", str(angular_project), "--list"])
        assert listed.exit_code == 1


class TestBatch:
    def _second_project(self, root: Path) -> Path:
        project = root / "second-app"
        (project / "src" / "app").mkdir(parents=True)
        (project / "package.json").write_text(
            json.dumps({"dependencies": {"@angular/core": "^20.0.0"}}), encoding="utf-8"
        )
        (project / "angular.json").write_text("{}", encoding="utf-8")
        (project / "src" / "app" / "app.html").write_text('<p *ngIf="ok">ok</p>\n', encoding="utf-8")
        return project

    def test_runs_every_project(self, angular_project: Path):
        root = angular_project.parent
        self._second_project(root)
        result = runner.invoke(app, ["batch", "--directory", str(root), "--mode", "analyze"])
        assert result.exit_code == 0
        assert "Found 2 Angular project(s)" in result.output
        assert "Batch Results" in result.output

    def test_failed_project_sets_exit_code(self, angular_project: Path):
        root = angular_project.parent
        second = self._second_project(root)
        (second / ".ngmodernize-rules").mkdir()
        (second / ".ngmodernize-rules" / "bad.yaml").write_text("- pattern: x\n")
        result = runner.invoke(app, ["batch", "--directory", str(root), "--mode", "analyze"])
        assert result.exit_code == 1
        assert "Batch Results" in result.output

    def test_no_projects(self, tmp_path: Path):
        result = runner.invoke(app, ["batch", "--directory", str(tmp_path)])
        assert result.exit_code == 1
        assert "No Angular projects" in result.output


class TestInteractive:
    def test_dry_run_session(self, angular_project: Path):
        before = _read(angular_project, "src/app/user.component.html")
        result = runner.invoke(app, ["interactive"], input=f"{angular_project}\ndry-run\nn\n\n")
        assert result.exit_code == 0
        assert "Migration Issues" in result.output
        assert _read(angular_project, "src/app/user.component.html") == before
        assert not (angular_project / "migration-reports").exists()

    def test_migrate_session(self, angular_project: Path):
        result = runner.invoke(
            app, ["interactive"], input=f"{angular_project}\nmigrate\ny\nn\n.html\n"
        )
        assert result.exit_code == 0
        assert "inject(HttpClient)" in _read(angular_project, "src/app/user.service.ts")
        assert "*ngIf" in _read(angular_project, "src/app/user.component.html")

"""Ledger CLI tests"""

import json
import subprocess
import sys
from pathlib import Path


def run_cli(args: list[str], db_path: Path, owner: str = "alice") -> subprocess.CompletedProcess:
    """Run the CLI in a subprocess"""
    cmd = [
        sys.executable,
        "-m",
        "src.ledger",
        "--owner",
        owner,
        "--db-path",
        str(db_path),
    ] + args
    return subprocess.run(
        cmd,
        capture_output=True,
        text=True,
        cwd=Path(__file__).parent.parent,
    )


def test_cli_list_empty(tmp_path):
    result = run_cli(["list", "--date", "2024-01-01", "--format", "json"], tmp_path / "cli.db")
    assert result.returncode == 0
    assert json.loads(result.stdout) == []


def test_cli_add_update_delete(tmp_path):
    db_path = tmp_path / "cli.db"

    result = run_cli(
        ["add", "--name", "Sleep", "--category", "Sleep", "--duration", "480", "--date", "2024-01-01", "--format", "json"],
        db_path,
    )
    assert result.returncode == 0
    added = json.loads(result.stdout)
    assert added["duration"] == 480
    activity_id = added["id"]

    result = run_cli(["update", "--id", str(activity_id), "--category", "Health", "--format", "json"], db_path)
    assert result.returncode == 0
    assert json.loads(result.stdout)["category"] == "Health"

    result = run_cli(["delete", "--id", str(activity_id), "--format", "json"], db_path)
    assert result.returncode == 0
    assert json.loads(result.stdout) == {"success": True, "id": activity_id}

    result = run_cli(["delete", "--id", str(activity_id)], db_path)
    assert result.returncode == 1
    assert "not found" in result.stderr

    result = run_cli(["delete", "--id", "99999999999999999999"], db_path)
    assert result.returncode == 1
    assert "not found" in result.stderr


def test_cli_budget_exceeded(tmp_path):
    db_path = tmp_path / "cli.db"
    run_cli(["add", "--name", "Sleep", "--category", "Sleep", "--duration", "480", "--date", "2024-01-01"], db_path)

    result = run_cli(
        ["add", "--name", "Meeting", "--category", "Work", "--duration", "1000", "--date", "2024-01-01"],
        db_path,
    )
    assert result.returncode == 1
    assert "Available: 960 minutes" in result.stderr


def test_cli_summary(tmp_path):
    db_path = tmp_path / "cli.db"
    run_cli(["add", "--name", "Code", "--category", "Work", "--duration", "120", "--date", "2024-01-01"], db_path)
    run_cli(["add", "--name", "Walk", "--category", "Leisure", "--duration", "30", "--date", "2024-01-01"], db_path)

    result = run_cli(["summary", "--date", "2024-01-01", "--format", "json"], db_path)
    assert result.returncode == 0
    summary = json.loads(result.stdout)
    assert summary["total_minutes"] == 150
    assert summary["per_category_minutes"] == {"Work": 120, "Leisure": 30}
    assert summary["dominant_category"] == "Work"


def test_cli_rejects_bad_date(tmp_path):
    result = run_cli(["list", "--date", "2024-02-30"], tmp_path / "cli.db")
    assert result.returncode == 1
    assert "date" in result.stderr

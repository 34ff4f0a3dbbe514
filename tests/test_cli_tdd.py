from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from housie_gen.cli import app
from housie_gen.version import __version__

runner = CliRunner()


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_generate_writes_outputs(tmp_path: Path):
    tickets = tmp_path / "out" / "tickets.json"
    report = tmp_path / "out" / "report.json"
    summary = tmp_path / "out" / "summary.csv"
    result = runner.invoke(
        app,
        [
            "generate",
            "--count",
            "4",
            "--seed",
            "123",
            "--no-print",
            "--out-tickets",
            str(tickets),
            "--out-report",
            str(report),
            "--summary-csv",
            str(summary),
        ],
    )
    assert result.exit_code == 0, result.output
    assert "Generated 4 tickets (seed 123)" in result.output
    data = json.loads(tickets.read_text(encoding="utf-8"))
    assert len(data["tickets"]) == 4
    assert data["run_meta"]["seed"] == 123
    rep = json.loads(report.read_text(encoding="utf-8"))
    assert rep["ok_all_valid"] is True
    assert summary.exists()


def test_generate_same_seed_same_tickets(tmp_path: Path):
    outs = []
    for name in ("a.json", "b.json"):
        path = tmp_path / name
        result = runner.invoke(
            app, ["generate", "-n", "2", "--seed", "5", "--no-print", "--out-tickets", str(path)]
        )
        assert result.exit_code == 0, result.output
        outs.append(json.loads(path.read_text(encoding="utf-8"))["tickets"])
    assert outs[0] == outs[1]


def test_generate_prints_tickets():
    result = runner.invoke(app, ["generate", "--seed", "1", "--colors", "never"])
    assert result.exit_code == 0, result.output
    assert "HOUSIE TICKET 1" in result.output


def test_dry_run_prints_hash():
    result = runner.invoke(app, ["generate", "--dry-run"])
    assert result.exit_code == 0
    assert "sha256:" in result.output


def test_verify_command(tmp_path: Path):
    tickets = tmp_path / "tickets.json"
    runner.invoke(app, ["generate", "-n", "3", "--seed", "2", "--no-print", "--out-tickets", str(tickets)])
    result = runner.invoke(app, ["verify", "--tickets", str(tickets), "--report", str(tmp_path / "r.json")])
    assert result.exit_code == 0, result.output
    assert "Checked 3 tickets, 0 invalid" in result.output

    data = json.loads(tickets.read_text(encoding="utf-8"))
    data["tickets"][0]["matrix"][0] = [None] * 9
    tickets.write_text(json.dumps(data), encoding="utf-8")
    result = runner.invoke(app, ["verify", "--tickets", str(tickets)])
    assert result.exit_code == 1
    assert "ticket 1: row 0 has 0 numbers" in result.output


def test_generate_seed_flag_wins_over_random_env(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("HOUSIE_GEN_SEED_MODE", "random")
    path = tmp_path / "tickets.json"
    result = runner.invoke(
        app, ["generate", "-n", "1", "--seed", "5", "--no-print", "--out-tickets", str(path)]
    )
    assert result.exit_code == 0, result.output
    assert json.loads(path.read_text(encoding="utf-8"))["run_meta"]["seed"] == 5


def test_verify_lists_every_problem_of_each_invalid_ticket(tmp_path: Path):
    tickets = tmp_path / "tickets.json"
    runner.invoke(app, ["generate", "-n", "2", "--seed", "3", "--no-print", "--out-tickets", str(tickets)])
    data = json.loads(tickets.read_text(encoding="utf-8"))
    for entry in data["tickets"]:
        entry["matrix"][0] = [None] * 9
    tickets.write_text(json.dumps(data), encoding="utf-8")
    result = runner.invoke(app, ["verify", "--tickets", str(tickets)])
    assert result.exit_code == 1
    assert "ticket 1: row 0 has 0 numbers" in result.output
    assert "ticket 2: row 0 has 0 numbers" in result.output
    assert "Checked 2 tickets, 2 invalid" in result.output

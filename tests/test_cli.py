"""Tests for CLI parser and main behavior."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from tripwire.cli.main import build_parser, main
from tripwire.exceptions import ConfigError
from tripwire.model import RunResult


def _project(root: Path, *lines: str) -> Path:
    (root / "app.py").write_text("\n".join(lines) + "\n", encoding="utf-8")
    return root


def test_build_parser_accepts_check_flags(tmp_path: Path) -> None:
    parser = build_parser()

    args = parser.parse_args(
        [
            "check",
            "--root",
            str(tmp_path),
            "--config",
            str(tmp_path / "tripwire.yaml"),
            "--workers",
            "3",
            "--json-out",
            str(tmp_path / "report.json"),
        ]
    )

    assert args.command == "check"
    assert args.root == tmp_path
    assert args.config == tmp_path / "tripwire.yaml"
    assert args.workers == 3
    assert args.json_out == tmp_path / "report.json"


def test_build_parser_defaults() -> None:
    args = build_parser().parse_args(["check"])

    assert args.root == Path(".")
    assert args.config is None
    assert args.no_cache is False
    assert args.workers is None
    assert args.json_out is None


@pytest.mark.parametrize(
    ("short_args", "long_args"),
    [
        pytest.param(["check", "-r", ".", "-c", "t.yaml"], ["check", "--root", ".", "--config", "t.yaml"], id="config"),
        pytest.param(["check", "-n"], ["check", "--no-cache"], id="no-cache"),
        pytest.param(["check", "-w", "2"], ["check", "--workers", "2"], id="workers"),
        pytest.param(["check", "-v"], ["check", "--verbose"], id="verbose"),
    ],
)
def test_shorthand_equivalent_to_long_form(short_args: list[str], long_args: list[str]) -> None:
    parser = build_parser()
    assert vars(parser.parse_args(short_args)) == vars(parser.parse_args(long_args))


def test_command_is_required() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_check_passes_when_every_condition_holds(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _project(tmp_path, "# tripwire: date 2999-01-01", "# tripwire: python >=3.0")

    code = main(["check", "-r", str(tmp_path), "--no-color"])

    assert code == 0
    out = capsys.readouterr().out
    assert "Checks      2" in out
    assert "Result      PASS" in out


def test_check_fails_on_past_date(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _project(tmp_path, "# tripwire: date 2000-01-01")

    code = main(["check", "-r", str(tmp_path), "--no-color"])

    assert code == 1
    out = capsys.readouterr().out
    assert "FAIL  app.py:1  2000-01-01 is now in the past" in out


def test_check_invalid_declaration_exits_2(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _project(tmp_path, "# tripwire: date 2000-02-30")

    code = main(["check", "-r", str(tmp_path), "--no-color"])

    assert code == 2
    assert "invalid declaration app.py:1" in capsys.readouterr().out


def test_check_config_error_exits_2(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / "tripwire.yaml").write_text("bogus: true\n", encoding="utf-8")

    code = main(["check", "-r", str(tmp_path)])

    assert code == 2
    assert "Configuration error" in capsys.readouterr().err


def test_check_missing_root_exits_2(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["check", "-r", str(tmp_path / "missing")])

    assert code == 2
    assert "does not exist" in capsys.readouterr().err


def test_check_rejects_out_of_range_workers(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["check", "-r", str(tmp_path), "--workers", "0"])

    assert code == 2
    assert "--workers" in capsys.readouterr().err


def test_skip_env_short_circuits(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _project(tmp_path, "# tripwire: date 2000-01-01")
    monkeypatch.setenv("TRIPWIRE_SKIP", "1")

    with patch("tripwire.cli.main.run_checks") as run_checks:
        code = main(["check", "-r", str(tmp_path)])

    assert code == 0
    run_checks.assert_not_called()
    assert "skipping" in capsys.readouterr().out


def test_check_forwards_options_to_run_checks(tmp_path: Path) -> None:
    with patch("tripwire.cli.main.run_checks", return_value=RunResult(outcomes=())) as run_checks:
        code = main(["check", "-r", str(tmp_path), "-n", "-w", "3", "--no-stdout"])

    assert code == 0
    run_checks.assert_called_once_with(root=tmp_path, config_path=None, no_cache=True, workers=3)


def test_check_reports_config_error_from_run(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with patch("tripwire.cli.main.run_checks", side_effect=ConfigError("broken")):
        code = main(["check", "-r", str(tmp_path)])

    assert code == 2
    assert "Configuration error: broken" in capsys.readouterr().err


def test_check_writes_json_report(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _project(tmp_path, "# tripwire: date 2000-01-01", "# tripwire: date 2999-01-01")
    report_path = tmp_path / "out" / "report.json"

    code = main(["check", "-r", str(tmp_path), "--json-out", str(report_path), "--no-stdout"])

    assert code == 1
    assert capsys.readouterr().out == ""
    report = json.loads(report_path.read_text(encoding="utf-8"))
    assert report["counts"] == {"pass": 1, "fail": 1, "indeterminate": 0}
    assert report["exit_code"] == 1
    assert [outcome["source"] for outcome in report["outcomes"]] == ["app.py:1", "app.py:2"]


def test_validate_reports_count(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _project(tmp_path, "# tripwire: issue org/repo#1", "# tripwire: crates serde <2.0.0")

    code = main(["validate", "-r", str(tmp_path)])

    assert code == 0
    assert "2 declared check(s)" in capsys.readouterr().out


def test_validate_reports_invalid_declarations(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _project(tmp_path, "# tripwire: crates serde", "# tripwire: issue org/repo")

    code = main(["validate", "-r", str(tmp_path)])

    assert code == 2
    err = capsys.readouterr().err
    assert "Invalid declaration: app.py:1" in err
    assert "Invalid declaration: app.py:2" in err


def test_validate_config_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["validate", "-r", str(tmp_path), "-c", str(tmp_path / "missing.yaml")])

    assert code == 2
    assert "Configuration error" in capsys.readouterr().err

import json
import os
from pathlib import Path

from cclemon.analysis import report_learner
from cclemon.core import config


FIXTURES = Path(__file__).resolve().parent / "fixtures" / "reports"


def _split_output(out):
    stats_block, weights_block = out.rstrip("\n").split("\n\n")
    stats_header, stats_json = stats_block.split("\n", 1)
    weights_header, weights_json = weights_block.split("\n", 1)
    return stats_header, json.loads(stats_json), weights_header, json.loads(weights_json)


def test_main_without_reports_prints_usage_and_reads_nothing(monkeypatch, capsys):
    def _fail_load(paths):
        raise AssertionError(f"unexpected load of {paths!r}")

    monkeypatch.setattr(report_learner, "load_reports", _fail_load)

    exit_code = report_learner.main([])

    captured = capsys.readouterr()
    assert exit_code == config.EXIT_USAGE == 1
    assert captured.out == ""
    assert captured.err.startswith("usage: cclemon-analyze [--] REPORT [REPORT ...]")


def test_main_prints_stats_and_left_side_weights(capsys):
    exit_code = report_learner.main([str(FIXTURES / "left_win.json")])

    captured = capsys.readouterr()
    stats_header, stats, weights_header, weights = _split_output(captured.out)
    assert exit_code == 0
    assert stats_header == "Aggregated stats:"
    assert stats == {
        "totalRounds": 2,
        "wins": {"left": 1, "right": 0},
        "actions": {
            "left": {"charge": 2, "gun": 0, "guard": 0},
            "right": {"charge": 0, "gun": 1, "guard": 1},
        },
    }
    assert weights_header == "Suggested CPU weights (charge/gun/guard):"
    assert weights == {"charge": 0.74, "gun": 0.15, "guard": 0.11}


def test_main_output_uses_two_space_indentation(capsys):
    report_learner.main([str(FIXTURES / "no_history.json")])

    lines = capsys.readouterr().out.splitlines()
    assert lines[:3] == ["Aggregated stats:", "{", '  "totalRounds": 0,']
    assert lines[-5:] == [
        "{",
        '  "charge": 0.36,',
        '  "gun": 0.36,',
        '  "guard": 0.27',
        "}",
    ]
    assert "" in lines


def test_main_aggregates_multiple_reports(capsys):
    exit_code = report_learner.main(
        [str(FIXTURES / name) for name in ("left_win.json", "right_win.json", "messy.json")]
    )

    _, stats, _, weights = _split_output(capsys.readouterr().out)
    assert exit_code == 0
    assert stats["totalRounds"] == 11
    assert stats["wins"] == {"left": 1, "right": 1}
    assert stats["actions"]["left"] == {"charge": 3, "gun": 1, "guard": 2}
    assert weights == {"charge": 0.48, "gun": 0.19, "guard": 0.32}


def test_main_reports_unreadable_file_and_aborts(tmp_path, capsys):
    missing = tmp_path / "missing.json"

    exit_code = report_learner.main([str(FIXTURES / "left_win.json"), str(missing)])

    captured = capsys.readouterr()
    assert exit_code == config.EXIT_LOAD_ERROR
    assert captured.out == ""
    assert captured.err.startswith("error: ")
    assert os.path.abspath(str(missing)) in captured.err


def test_main_reports_malformed_json(tmp_path, capsys):
    broken = tmp_path / "broken.json"
    broken.write_text("winner: 左", encoding="utf-8")

    exit_code = report_learner.main([str(broken)])

    captured = capsys.readouterr()
    assert exit_code == config.EXIT_LOAD_ERROR
    assert captured.out == ""
    assert str(broken) in captured.err
    assert "invalid JSON" in captured.err


def test_main_accepts_dash_prefixed_paths_after_separator(tmp_path, monkeypatch, capsys):
    (tmp_path / "-x.json").write_text(
        (FIXTURES / "left_win.json").read_text(encoding="utf-8"), encoding="utf-8"
    )
    monkeypatch.chdir(tmp_path)

    exit_code = report_learner.main(["--", "-x.json"])

    _, stats, _, weights = _split_output(capsys.readouterr().out)
    assert exit_code == 0
    assert stats["totalRounds"] == 2
    assert weights == {"charge": 0.74, "gun": 0.15, "guard": 0.11}

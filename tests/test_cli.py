"""Tests for the command-line runner."""

from __future__ import annotations

import io
import json

import pandas as pd

from walk_lab.cli import EXIT_INVALID, main


def _run(*argv: str) -> tuple[int, str]:
    out = io.StringIO()
    code = main(list(argv), out=out)
    return code, out.getvalue()


class TestCli:
    def test_text_single_trial(self):
        code, text = _run("--seed", "1")
        assert code == 0
        assert "Simulation Results" in text
        assert "Win Probability:   45.0%" in text
        assert "Individual Simulations" not in text

    def test_text_many_trials(self):
        code, text = _run("--trials", "3", "--seed", "1")
        assert code == 0
        assert "Primary Simulation" in text
        assert "Simulation 3:" in text

    def test_json(self):
        code, text = _run("--trials", "4", "--seed", "2", "--format", "json")
        assert code == 0
        payload = json.loads(text)
        assert payload["trials"] == 4
        assert len(payload["trial_records"]) == 4
        assert payload["trial_records"][0]["trial"] == 1
        assert 0.0 <= payload["bankruptcy_rate"] <= 1.0

    def test_json_is_reproducible(self):
        _, first = _run("--trials", "5", "--seed", "9", "--format", "json")
        _, second = _run("--trials", "5", "--seed", "9", "--format", "json")
        assert first == second

    def test_csv(self):
        code, text = _run("--trials", "6", "--seed", "3", "--format", "csv")
        assert code == 0
        frame = pd.read_csv(io.StringIO(text))
        assert len(frame) == 6
        assert "outcome" in frame.columns

    def test_cap_applies(self):
        _, text = _run("--win-pct", "80", "--format", "json", "--seed", "1")
        assert json.loads(text)["config"]["win_probability"] == 0.5

    def test_no_cap(self):
        _, text = _run("--win-pct", "80", "--no-cap", "--format", "json", "--seed", "1")
        assert json.loads(text)["config"]["win_probability"] == 0.8

    def test_steps_clamped(self):
        _, text = _run("--steps", "5", "--format", "json", "--seed", "1")
        assert json.loads(text)["config"]["max_steps"] == 10

    def test_summary_only(self):
        code, text = _run("--summary-only", "--format", "json", "--seed", "1")
        assert code == 0
        assert json.loads(text)["config"]["keep_history"] is False

    def test_invalid_exits_nonzero(self):
        code, text = _run("--bank", "-5")
        assert code == EXIT_INVALID
        assert text == ""

    def test_config_dir(self, tmp_path):
        (tmp_path / "settings.yaml").write_text(
            "defaults:\n  bet_size: 10\n  trial_count: 2\n", encoding="utf-8"
        )
        _, text = _run("--config-dir", str(tmp_path), "--format", "json", "--seed", "1")
        payload = json.loads(text)
        assert payload["config"]["bet_size"] == 10
        assert payload["trials"] == 2

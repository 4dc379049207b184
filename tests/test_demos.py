"""Tests for the batch sweep demo."""

from __future__ import annotations

import json
from pathlib import Path

import pytest


class TestBatchSweepDemo:
    """Compile once, evaluate a grid of bindings."""

    def test_result_count(self, tmp_path: Path) -> None:
        from demos.batch_sweep_demo.run import run_demo

        manifest = run_demo(output_dir=tmp_path)
        assert manifest["result_count"] == 9
        assert [r["index"] for r in manifest["results"]] == list(range(9))

    def test_postfix_recorded(self, tmp_path: Path) -> None:
        from demos.batch_sweep_demo.run import run_demo

        manifest = run_demo(output_dir=tmp_path)
        assert manifest["postfix"] == "amount 1.0 rate n / + n years * ^ *"

    def test_compound_interest_value(self, tmp_path: Path) -> None:
        from demos.batch_sweep_demo.run import run_demo

        manifest = run_demo(output_dir=tmp_path)
        first_year = next(
            r for r in manifest["results"] if r["rate"] == 0.05 and r["years"] == 1.0
        )
        assert first_year["value"] == pytest.approx(1051.161898, abs=1e-6)

    def test_values_grow_with_term(self, tmp_path: Path) -> None:
        from demos.batch_sweep_demo.run import run_demo

        manifest = run_demo(output_dir=tmp_path)
        by_rate: dict[float, list[float]] = {}
        for r in manifest["results"]:
            by_rate.setdefault(r["rate"], []).append(r["value"])
        for values in by_rate.values():
            assert values == sorted(values)

    def test_manifest_stable_across_runs(self, tmp_path: Path) -> None:
        """Manifest JSON is byte-for-byte identical across two runs."""
        from demos.batch_sweep_demo.run import run_demo

        out1 = tmp_path / "r1"
        out1.mkdir()
        run_demo(output_dir=out1)

        out2 = tmp_path / "r2"
        out2.mkdir()
        run_demo(output_dir=out2)

        assert (out1 / "batch_manifest.json").read_bytes() == (
            out2 / "batch_manifest.json"
        ).read_bytes()

    def test_manifest_no_timestamps(self, tmp_path: Path) -> None:
        from demos.batch_sweep_demo.run import run_demo

        run_demo(output_dir=tmp_path)
        text = (tmp_path / "batch_manifest.json").read_text()
        assert "timestamp" not in text
        assert json.loads(text)["demo"] == "batch_sweep"

    def test_console_output(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        from demos.batch_sweep_demo.run import run_demo

        run_demo(output_dir=tmp_path)
        out = capsys.readouterr().out
        assert "Batch manifest written: 9 result(s)" in out

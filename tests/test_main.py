"""Tests for the Hydra command line entry point."""

import os
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent


def run_main(tmp_path, *overrides):
    env = dict(os.environ, MPLBACKEND="Agg", PYTHONIOENCODING="utf-8")
    env["PYTHONPATH"] = os.pathsep.join(
        p for p in (str(ROOT), env.get("PYTHONPATH")) if p
    )
    return subprocess.run(
        [
            sys.executable,
            str(ROOT / "main.py"),
            *overrides,
            "visualization.show_plots=false",
            f"hydra.run.dir={tmp_path}",
        ],
        cwd=ROOT,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8",
        timeout=300,
    )


def test_main_runs_markov_section(tmp_path):
    completed = run_main(tmp_path, "run=markov", "section.markov.n_simulation=2000")
    assert completed.returncode == 0, completed.stderr
    assert "马尔可夫链演示完成" in completed.stdout
    assert "最大似然估计演示完成" not in completed.stdout
    assert "运行完成" in completed.stdout


def test_main_runs_mle_section_with_golden_search(tmp_path):
    completed = run_main(tmp_path, "run=mle", "section.mle.optimizer.method=golden")
    assert completed.returncode == 0, completed.stderr
    assert "λ_ML = 3.9167" in completed.stdout
    assert "golden" in completed.stdout


def test_main_rejects_unknown_section(tmp_path):
    completed = run_main(tmp_path, "run=bogus")
    assert completed.returncode != 0
    assert "马尔可夫链演示完成" not in completed.stdout

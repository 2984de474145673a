"""Tests for the section registry, configuration and command line runner."""

import pytest

import run_all_sections
from probmodels.errors import InvalidInputError
from probmodels.sections import SECTIONS, resolve_sections, run_section


def test_config_composes_both_sections():
    cfg = run_all_sections.load_config()
    assert cfg.run == "all"
    assert cfg.general.seed == 42
    assert list(cfg.section.mle.binomial.tosses) == [
        0, 1, 0, 0, 0, 1, 1, 0, 1, 0, 0, 1, 0, 0, 1
    ]
    assert cfg.section.mle.poisson.upper == 20.0
    assert cfg.section.mle.optimizer.method == "brent"
    assert len(cfg.section.markov.states) == 3


def test_config_overrides():
    cfg = run_all_sections.load_config(
        ["visualization.show_plots=false", "section.mle.optimizer.method=golden"]
    )
    assert cfg.visualization.show_plots is False
    assert cfg.section.mle.optimizer.method == "golden"


def test_resolve_sections():
    assert resolve_sections("all") == list(SECTIONS)
    assert resolve_sections("markov") == ["markov"]
    with pytest.raises(InvalidInputError):
        resolve_sections("chapter99")


@pytest.mark.parametrize("name", list(SECTIONS))
def test_run_section_without_plots(name, capsys):
    cfg = run_all_sections.load_config(["visualization.show_plots=false"])
    run_section(name, cfg)
    assert "演示完成" in capsys.readouterr().out


def test_list_sections(capsys):
    assert run_all_sections.main(["--list"]) == 0
    out = capsys.readouterr().out
    for name in SECTIONS:
        assert name in out


def test_main_runs_single_section(capsys):
    assert run_all_sections.main(["--section", "mle", "--no-plots"]) == 0
    out = capsys.readouterr().out
    assert "成功运行：1个" in out
    assert "λ_ML = 3.9167" in out


def test_main_rejects_unknown_section():
    with pytest.raises(InvalidInputError):
        run_all_sections.main(["--section", "bogus", "--no-plots"])


@pytest.mark.parametrize("name", ["mle", "markov", "all"])
def test_run_override_selects_sections(name):
    cfg = run_all_sections.load_config([f"run={name}"])
    assert cfg.run == name
    assert resolve_sections(cfg.run) == (list(SECTIONS) if name == "all" else [name])
    # per-section settings stay mounted regardless of the selector
    assert "mle" in cfg.section and "markov" in cfg.section

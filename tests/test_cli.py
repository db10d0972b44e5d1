import matplotlib

matplotlib.use("Agg")

import pytest

from simulations.sweep import main


def test_cli_writes_results_table(tmp_path, capsys):
    out = tmp_path / "output.csv"
    rc = main([
        "--processors", "2", "4",
        "--max-modules", "8",
        "--distribution", "uniform",
        "--seed", "3",
        "--out", str(out),
        "--overwrite",
    ])
    assert rc == 0

    lines = out.read_text().splitlines()
    assert lines[0] == "Uniform Distribution"
    assert len(lines) == 3
    for line, p in zip(lines[1:], ("2", "4")):
        cells = line.split(",")
        assert cells[0] == p
        assert len(cells) == 1 + 8
        assert all(float(c) >= 0.0 for c in cells[1:])

    printed = capsys.readouterr().out
    assert "uniform p=2" in printed
    assert "uniform p=4" in printed


def test_cli_runs_both_distributions_by_default(tmp_path):
    out = tmp_path / "output.csv"
    assert main(["--processors", "2", "--max-modules", "3", "--seed", "1", "--out", str(out)]) == 0

    lines = out.read_text().splitlines()
    assert lines[0] == "Uniform Distribution"
    assert lines[2] == "Gaussian Distribution"
    assert len(lines) == 4


def test_cli_saves_plot(tmp_path):
    png = tmp_path / "chart.png"
    rc = main([
        "--processors", "2",
        "--max-modules", "4",
        "--seed", "2",
        "--out", str(tmp_path / "output.csv"),
        "--save-plot", str(png),
    ])
    assert rc == 0
    assert png.exists() and png.stat().st_size > 0


@pytest.mark.parametrize(
    "argv",
    [
        ["--max-modules", "0"],
        ["--processors", "0"],
        ["--distribution", "poisson"],
    ],
)
def test_cli_rejects_bad_arguments(tmp_path, argv):
    with pytest.raises(SystemExit) as exc:
        main(argv + ["--out", str(tmp_path / "output.csv")])
    assert exc.value.code == 2

import logging

import pytest

from tsp_search.cli import main
from tsp_search.logs import configure_logging, get_logger


def _output_lines(capsys):
    return capsys.readouterr().out.split()


def test_solve_vbss_prints_cost_and_one_indexed_tour(square_tsp, capsys):
    code = main(["--log-level", "WARNING", "solve", str(square_tsp), "--samples", "100", "--seed", "1"])
    assert code == 0
    lines = _output_lines(capsys)
    assert lines[0] == "40"
    assert sorted(int(x) for x in lines[1:]) == [1, 2, 3, 4]


def test_solve_ga(square_tsp, capsys):
    argv = [
        "--log-level", "WARNING", "solve", str(square_tsp), "--strategy", "ga",
        "--population-size", "20", "--generations", "20", "--log-interval", "0", "--seed", "3",
    ]
    assert main(argv) == 0
    lines = _output_lines(capsys)
    assert lines[0] == "40"
    assert len(lines) == 5


def test_solve_missing_file(tmp_path, capsys):
    assert main(["--log-level", "CRITICAL", "solve", str(tmp_path / "missing.tsp")]) == 1
    assert capsys.readouterr().out == ""


def test_solve_rejects_single_city(tmp_path):
    path = tmp_path / "one.tsp"
    path.write_text("NAME: one\nTYPE: TSP\nDIMENSION: 1\nEDGE_WEIGHT_TYPE: EUC_2D\nNODE_COORD_SECTION\n1 0 0\nEOF\n")
    assert main(["--log-level", "CRITICAL", "solve", str(path)]) == 2


def test_solve_rejects_bad_rate(square_tsp):
    argv = ["--log-level", "CRITICAL", "solve", str(square_tsp), "--strategy", "ga", "--mutation-rate", "2"]
    assert main(argv) == 2


def test_bench(square_tsp, capsys):
    argv = ["--log-level", "WARNING", "bench", str(square_tsp.parent), "--runs", "2", "--samples", "50", "--seed", "0"]
    assert main(argv) == 0
    out = capsys.readouterr().out
    assert out.startswith("square")
    assert "best=40" in out


def test_bench_empty_directory(tmp_path):
    assert main(["--log-level", "CRITICAL", "bench", str(tmp_path)]) == 1


def test_unknown_strategy_exits(square_tsp):
    with pytest.raises(SystemExit):
        main(["solve", str(square_tsp), "--strategy", "annealing"])


def test_loggers_live_under_package_root():
    assert get_logger("cli").name == "tsp_search.cli"
    assert get_logger("tsp_search.data").name == "tsp_search.data"
    assert configure_logging("debug").level == logging.DEBUG
    with pytest.raises(ValueError):
        configure_logging("chatty")

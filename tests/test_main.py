"""
Test the command-line smoke run
"""
import logging

from warpgrid.__main__ import create_parser, main


def test_parser_defaults():
    args = create_parser().parse_args([])
    assert (args.width, args.height, args.resolution, args.debug) == (100, 100, 10, False)


def test_main_runs(caplog):
    with caplog.at_level(logging.INFO, logger="warpgrid"):
        assert main(["--width", "60", "--height", "40", "--log-level", "info"]) == 0
    assert "Lattice: 7x5 control points" in caplog.text
    assert "surface_point(0.5, 0.5) = (30.0, 20.0)" in caplog.text
    assert "Generated 4800 values" in caplog.text

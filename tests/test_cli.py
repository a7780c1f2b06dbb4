from __future__ import annotations

import pytest

from wayfinder.cli import EXAMPLE_PHRASE, main


def test_route_from_marker(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["--from", "MainGateway", "take me to the nearest stairs"])

    output = capsys.readouterr().out
    assert exit_code == 0
    assert "You are at Main Gateway" in output
    assert "Navigating to Staircase 1" in output
    assert "Shortest path: Main Gateway → Staircase 1" in output
    assert "Distance: 20.00" in output
    assert "1. Turn left" in output
    assert "2. Go straight to Staircase 1" in output
    assert "You have arrived at Staircase 1" in output


def test_category_without_marker_fails(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["nearest stairs"])

    assert exit_code == 1
    assert "Scan a location marker first" in capsys.readouterr().out


def test_unknown_start_marker(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["--from", "Basement", "olive"])

    assert exit_code == 1
    assert "Unknown location Basement" in capsys.readouterr().out


def test_missing_map_file(tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["--map", str(tmp_path / "nope.json"), "olive"])

    assert exit_code == 2
    assert "Could not load map" in capsys.readouterr().err


def test_help_example_phrase_resolves(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["--from", "MainGateway", EXAMPLE_PHRASE])

    output = capsys.readouterr().out
    assert exit_code == 0
    assert "Navigating to Male Toilet 1" in output
    assert "You have arrived at Male Toilet 1" in output

"""Tests for the placeroute CLI."""

from __future__ import annotations

import json

from typer.testing import CliRunner

from placeroute.cli import app

runner = CliRunner()


def test_compile() -> None:
    result = runner.invoke(app, ["compile", "/blog/(id:digit)/(:alpha:2)"])
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[0] == "^/blog/(?P<id>[0-9]+)/([a-zA-Z]{2})$"
    assert lines[1].split() == ["id", "digit", "-", "(id:digit)"]
    assert lines[2].split() == ["1", "alpha", "2", "(:alpha:2)"]


def test_compile_error_exits_2() -> None:
    result = runner.invoke(app, ["compile", "/x/(x:notatype)"])
    assert result.exit_code == 2
    assert "Unknown placeholder type" in result.output


def test_compile_with_extra_type() -> None:
    result = runner.invoke(app, ["compile", "/p/(s:slug)", "--type", "slug=[a-z-]"])
    assert result.exit_code == 0
    assert result.output.splitlines()[0] == "^/p/(?P<s>[a-z-]+)$"


def test_compile_with_fixed_type() -> None:
    result = runner.invoke(app, ["compile", "/p/(z:zip:9)", "--type", "zip=[0-9]{5}", "--fixed"])
    assert result.exit_code == 0
    assert result.output.splitlines()[0] == "^/p/(?P<z>[0-9]{5})$"


def test_bad_type_option() -> None:
    result = runner.invoke(app, ["compile", "/p", "--type", "slug"])
    assert result.exit_code == 2
    assert "NAME=PATTERN" in result.output


def test_match() -> None:
    result = runner.invoke(app, ["match", "/archive/(y:year)/(m:month)", "/archive/2023/05"])
    assert result.exit_code == 0
    assert json.loads(result.output) == {"y": "2023", "m": "05"}


def test_match_failure_exits_1() -> None:
    result = runner.invoke(app, ["match", "/blog/(id:digit)", "/blog/abc"])
    assert result.exit_code == 1


def test_reverse() -> None:
    result = runner.invoke(app, ["reverse", "/blog/(id:digit)/(:lower)", "id=42", "1=intro"])
    assert result.exit_code == 0
    assert result.output.strip() == "/blog/42/intro"


def test_reverse_failure_exits_1() -> None:
    result = runner.invoke(app, ["reverse", "/blog/(id:digit)", "id=abc"])
    assert result.exit_code == 1
    assert "do not fit" in result.output


def test_reverse_literal_route() -> None:
    result = runner.invoke(app, ["reverse", "/about"])
    assert result.exit_code == 0
    assert result.output.strip() == "/about"


def test_types() -> None:
    result = runner.invoke(app, ["types", "--type", "slug=[a-z-]"])
    assert result.exit_code == 0
    names = [line.split()[0] for line in result.output.splitlines()]
    assert names[0] == "any"
    assert "uuid" in names
    assert names[-1] == "slug"

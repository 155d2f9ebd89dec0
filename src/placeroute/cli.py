"""placeroute command-line interface powered by Typer."""

import json
from typing import Annotated

import typer

from placeroute.compiler import CompiledRoute, compile_template
from placeroute.errors import CompileError
from placeroute.matching import match
from placeroute.placeholders import PlaceholderRegistry
from placeroute.reverse import reverse

app = typer.Typer(name="placeroute", add_completion=False, no_args_is_help=True)

TypeOption = Annotated[
    list[str] | None,
    typer.Option("--type", "-t", help="Extra placeholder type as NAME=PATTERN (repeatable)."),
]
FixedOption = Annotated[
    bool,
    typer.Option("--fixed", help="Register the extra types as fixed-shape (no quantifier)."),
]


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------


def _build_registry(types: list[str] | None, fixed: bool) -> PlaceholderRegistry:
    """Fresh registry with the built-ins plus ``NAME=PATTERN`` extras."""
    registry = PlaceholderRegistry()
    for item in types or []:
        name, sep, pattern = item.partition("=")
        if not sep or not name or not pattern:
            typer.echo(f"Error: expected NAME=PATTERN, got {item!r}", err=True)
            raise typer.Exit(2)
        try:
            registry.register(name, pattern, repeatable=not fixed)
        except ValueError as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(2) from exc
    return registry


def _compile(template: str, types: list[str] | None, fixed: bool) -> CompiledRoute:
    registry = _build_registry(types, fixed)
    try:
        return compile_template(template, registry)
    except CompileError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(2) from exc


def _parse_params(pairs: list[str]) -> dict[str, str]:
    params: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            typer.echo(f"Error: expected KEY=VALUE, got {pair!r}", err=True)
            raise typer.Exit(2)
        params[key] = value
    return params


# ------------------------------------------------------------------
# Commands
# ------------------------------------------------------------------


@app.command("compile")
def compile_command(
    template: Annotated[str, typer.Argument(help="URL template, e.g. /blog/(id:digit).")],
    types: TypeOption = None,
    fixed: FixedOption = False,
) -> None:
    """Show the regex and placeholders a template compiles to."""
    compiled = _compile(template, types, fixed)
    typer.echo(compiled.pattern)
    for token in compiled.tokens:
        typer.echo(f"  {token.name}\t{token.type.name}\t{token.quantifier or '-'}\t{token.literal}")


@app.command("match")
def match_command(
    template: Annotated[str, typer.Argument(help="URL template.")],
    path: Annotated[str, typer.Argument(help="Request path to test.")],
    types: TypeOption = None,
    fixed: FixedOption = False,
) -> None:
    """Match a path against a template and print the captured params as JSON."""
    compiled = _compile(template, types, fixed)
    result = match(compiled, path)
    if not result:
        typer.echo(f"No match: {path!r}", err=True)
        raise typer.Exit(1)
    typer.echo(json.dumps({str(key): value for key, value in result.params.items()}))


@app.command("reverse")
def reverse_command(
    template: Annotated[str, typer.Argument(help="URL template.")],
    params: Annotated[list[str] | None, typer.Argument(help="Values as KEY=VALUE.")] = None,
    types: TypeOption = None,
    fixed: FixedOption = False,
) -> None:
    """Build a URL from a template and parameter values."""
    compiled = _compile(template, types, fixed)
    url = reverse(compiled, _parse_params(params or []))
    if url is None:
        typer.echo("Error: parameters do not fit the template.", err=True)
        raise typer.Exit(1)
    typer.echo(url)


@app.command("types")
def types_command(
    types: TypeOption = None,
    fixed: FixedOption = False,
) -> None:
    """List the available placeholder types."""
    for ptype in _build_registry(types, fixed):
        kind = "repeatable" if ptype.repeatable else "fixed"
        typer.echo(f"{ptype.name:<8} {kind:<10} {ptype.pattern}")

"""Command line interface for :mod:`rdfuri`."""

import logging
import sys
from typing import Optional

import click

from .config import Config
from .errors import MalformedURIError
from .models import RelativizeResult, ResolutionResult, URIComponents
from .relativizer import FormMask, parse_form_mask
from .uri import URI

__all__ = [
    "main",
]

FORM_NAMES = [name.lower() for name in FormMask.__members__ if name != "NONE"]


def _json_output(ctx: click.Context, as_json: bool) -> bool:
    return as_json or ctx.obj["config"].OUTPUT_FORMAT == "json"


@click.group()
@click.version_option()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    r"""rdfuri - RFC 2396 URI parsing, resolution and relativization.

    Parse URIs into their components, resolve references against a
    base URI, and compute the shortest relative reference from a base
    to a target.
    """
    ctx.ensure_object(dict)
    config = ctx.obj.setdefault("config", Config)
    ctx.obj["verbose"] = verbose

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            force=True,
        )
        logging.getLogger("rdfuri").setLevel(logging.DEBUG)
    else:
        logging.basicConfig(
            level=config.LOG_LEVEL, format="%(levelname)s: %(message)s", force=True
        )


@main.command()
@click.argument("uri")
@click.option("--json", "as_json", is_flag=True, help="Print components as JSON")
@click.pass_context
def parse(ctx: click.Context, uri: str, as_json: bool) -> None:
    """Parse an absolute URI and print its components.

    Example:
      rdfuri parse "http://user@example.org:8080/a/b?q#f"
    """
    try:
        components = URIComponents.from_uri(URI(uri))
    except MalformedURIError as e:
        click.echo(f"Error: {e}", err=True)
        raise click.Abort()

    if _json_output(ctx, as_json):
        click.echo(components.model_dump_json(indent=2))
        return

    for name, value in components.model_dump().items():
        if value is not None:
            click.echo(f"{name:<14}{value}")


@main.command()
@click.argument("base")
@click.argument("references", nargs=-1, required=True)
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON")
@click.pass_context
def resolve(ctx: click.Context, base: str, references: tuple[str, ...], as_json: bool) -> None:
    """Resolve one or more references against BASE.

    Example:
      rdfuri resolve "http://a/b/c/d;p?q" ../g "#s"
    """
    try:
        base_uri = URI(base)
        for reference in references:
            resolved = base_uri.resolve(reference)
            if _json_output(ctx, as_json):
                result = ResolutionResult(
                    base=base,
                    reference=reference,
                    resolved=URIComponents.from_uri(resolved),
                )
                click.echo(result.model_dump_json())
            else:
                click.echo(str(resolved))
    except MalformedURIError as e:
        click.echo(f"Error: {e}", err=True)
        raise click.Abort()


@main.command()
@click.argument("base")
@click.argument("targets", nargs=-1, required=True)
@click.option(
    "--form",
    "forms",
    multiple=True,
    type=click.Choice(FORM_NAMES, case_sensitive=False),
    help="Allowed reference form (repeatable, default from RDFURI_DEFAULT_FLAGS)",
)
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON")
@click.pass_context
def relativize(
    ctx: click.Context,
    base: str,
    targets: tuple[str, ...],
    forms: tuple[str, ...],
    as_json: bool,
) -> None:
    """Print the shortest reference from BASE to each target.

    Example:
      rdfuri relativize --form relative --form parent \
                        http://a/b/c/d http://a/b/x
    """
    try:
        if forms:
            flags = parse_form_mask(",".join(forms))
        else:
            flags = ctx.obj["config"].default_flags()
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        raise click.Abort()

    try:
        base_uri = URI(base)
        for target in targets:
            reference = base_uri.relativize(target, flags)
            if _json_output(ctx, as_json):
                result = RelativizeResult(
                    base=base,
                    target=target,
                    flags=[f.name.lower() for f in FormMask if f & flags and f.name != "ALL"],
                    reference=reference,
                )
                click.echo(result.model_dump_json())
            else:
                click.echo(reference)
    except MalformedURIError as e:
        click.echo(f"Error: {e}", err=True)
        raise click.Abort()


@main.command()
@click.argument("source", type=click.File("r"), default="-")
@click.option("--base", help="Base URI for relative references")
def check(source, base: Optional[str]) -> None:
    """Validate URIs, one per line, from SOURCE (default: stdin).

    Prints every invalid line with the reason and exits with status 1
    when any line is invalid.

    Example:
      rdfuri check uris.txt --base http://example.org/
    """
    try:
        base_uri = URI(base) if base else None
    except MalformedURIError as e:
        click.echo(f"Error: invalid base: {e}", err=True)
        raise click.Abort()

    invalid = 0
    total = 0
    for line_no, line in enumerate(source, start=1):
        text = line.strip()
        if not text:
            continue
        total += 1
        try:
            URI(text, base=base_uri)
        except MalformedURIError as e:
            invalid += 1
            click.echo(f"{line_no}: {e.kind.value}: {e}")

    click.echo(f"Checked {total} URIs, {invalid} invalid")
    if invalid:
        sys.exit(1)


if __name__ == "__main__":
    main()

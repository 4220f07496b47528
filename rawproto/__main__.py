import logging
from functools import partial
from typing import BinaryIO

import click

from . import Casing, decode
from .const import DEFAULT_MAX_DEPTH
from .errors import DecodeError
from .render import render_text, to_json

log = logging.getLogger(__name__)

out = partial(click.secho, bold=True, err=True)
err = partial(click.secho, fg="red", err=True)


def read_input(src: BinaryIO, hex_input: bool) -> bytes:
    data = src.read()
    if not hex_input:
        return data
    try:
        return bytes.fromhex("".join(data.decode("ascii").split()))
    except (UnicodeDecodeError, ValueError) as e:
        raise click.UsageError(f"Input is not valid hex: {e}")


@click.group()
@click.pass_context
def main(ctx: click.Context):
    """Decode raw protobuf wire data without a schema"""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@main.command("decode")
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
)
@click.option(
    "-x",
    "--hex",
    "hex_input",
    is_flag=True,
    help="Treat the input as hexadecimal text, whitespace is ignored",
)
@click.option(
    "-j",
    "--json",
    "as_json",
    is_flag=True,
    help="Print the decoded tree as JSON instead of text",
)
@click.option(
    "--casing",
    type=click.Choice(["camel", "snake"]),
    default="camel",
    help="Key casing of the JSON output",
)
@click.option(
    "--max-depth",
    type=click.IntRange(min=0),
    default=DEFAULT_MAX_DEPTH,
    show_default=True,
    help="How deep to look for nested messages",
)
@click.argument("src", type=click.File("rb"), default="-")
def decode_command(
    verbose: bool,
    hex_input: bool,
    as_json: bool,
    casing: str,
    max_depth: int,
    src: BinaryIO,
):
    """Decode the protobuf message in SRC (a file, or - for stdin)."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    data = read_input(src, hex_input)
    log.debug("Read %d bytes from %s", len(data), getattr(src, "name", src))

    try:
        fields = decode(data, max_depth=max_depth)
    except DecodeError as e:
        err(f"Failed to decode {len(data)} bytes: {e}")
        raise SystemExit(1)

    if not fields:
        return out("No fields found")

    if as_json:
        click.echo(to_json(fields, indent=2, casing=Casing[casing.upper()]))
    else:
        click.echo(render_text(fields))


# Decorators aren't handled very well
main: click.Group
decode_command: click.Command


if __name__ == "__main__":
    main()

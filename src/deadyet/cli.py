from itertools import islice

import click
import requests
from rich.console import Console

from deadyet.clock import current_unix
from deadyet.config import Settings
from deadyet.dead import DEAD_MASK, DEAD_PATTERN, has_dead, next_dead_offset
from deadyet.iterators import iterate_match_ranges, iterate_matches
from deadyet.logs import LEVELS, configure_logging
from deadyet.matcher import contains_pattern
from deadyet.offsets import next_match_offset, next_match_offset_at_alignment
from deadyet.ui import render_matches, render_now, render_ranges
from deadyet.utils import DeadyetError, NumberBase, format_hex, parse_number


class NumberParam(click.ParamType):
    """Click parameter for u64 values, with 0x/0o/0b prefixes or a fixed base."""

    name = "number"

    def __init__(self, base: NumberBase = "auto") -> None:
        self.base = base

    def convert(self, value, param, ctx):
        if isinstance(value, int):
            return value
        try:
            return parse_number(value, self.base)
        except DeadyetError as e:
            self.fail(str(e), param, ctx)


NUMBER = NumberParam("auto")
HEX = NumberParam("hex")

DEFAULTS = Settings()

pattern_option = click.option(
    "--pattern", "-p", type=HEX, default=format_hex(DEAD_PATTERN), show_default=True,
    help="Hex pattern to look for.",
)
mask_option = click.option(
    "--mask", "-m", type=HEX, default=format_hex(DEAD_MASK), show_default=True,
    help="Hex mask defining the alignment width.",
)
count_option = click.option(
    "--count", "-n", type=click.IntRange(min=1), default=10, show_default=True,
    help="How many results to show.",
)


def _console() -> Console:
    return Console(highlight=False)


@click.group()
@click.option(
    "--log-level", type=click.Choice(LEVELS, case_sensitive=False),
    default=DEFAULTS.log_level, envvar="DEADYET_LOG_LEVEL", show_default=True,
)
@click.option("--json-logs", is_flag=True, envvar="DEADYET_JSON_LOGS", help="Emit logs as JSON.")
def cli(log_level: str, json_logs: bool):
    """Find hex patterns like DEAD in integers and unix timestamps."""
    configure_logging(log_level, json=json_logs)


@cli.command()
@click.argument("number", type=NUMBER)
@click.argument("pattern", type=HEX)
def check(number: int, pattern: int):
    """Check whether PATTERN (hex) occurs in the hex digits of NUMBER."""
    found = contains_pattern(number, pattern)
    click.echo(f"find {format_hex(pattern)} in {format_hex(number)} -> {str(found).lower()}")


@cli.command()
@click.argument("number", type=NUMBER)
def dead(number: int):
    """Answer yes or no: does NUMBER contain DEAD?"""
    click.echo("yes" if has_dead(number) else "no")


@cli.command("next")
@click.argument("number", type=NUMBER)
@pattern_option
@mask_option
@click.option(
    "--ignore-digits", "-i", type=click.IntRange(min=0), default=None,
    help="Only consider the alignment that skips this many low digits.",
)
def next_cmd(number: int, pattern: int, mask: int, ignore_digits):
    """Show how far NUMBER is from the next value containing the pattern."""
    try:
        if ignore_digits is None:
            offset = next_match_offset(number, pattern, mask)
        else:
            offset = next_match_offset_at_alignment(number, ignore_digits, pattern, mask)
    except DeadyetError as e:
        raise click.ClickException(str(e))

    if offset is None:
        click.echo(f"no match after {format_hex(number)}")
        return
    target = number + offset
    click.echo(f"offset {offset} ({format_hex(offset)}) -> {format_hex(target)} ({target})")


@cli.command()
@click.argument("start", type=NUMBER)
@pattern_option
@mask_option
@count_option
def matches(start: int, pattern: int, mask: int, count: int):
    """List the next values containing the pattern, from START onward."""
    try:
        values = list(islice(iterate_matches(start, pattern, mask), count))
    except DeadyetError as e:
        raise click.ClickException(str(e))
    _console().print(render_matches(values, pattern, start))


@cli.command()
@click.argument("start", type=NUMBER)
@pattern_option
@mask_option
@count_option
def ranges(start: int, pattern: int, mask: int, count: int):
    """List the next runs of consecutive values containing the pattern."""
    try:
        found = list(islice(iterate_match_ranges(start, pattern, mask), count))
    except DeadyetError as e:
        raise click.ClickException(str(e))
    _console().print(render_ranges(found, pattern))


@cli.command()
def now():
    """Is the current unix timestamp DEAD yet?"""
    try:
        timestamp = current_unix()
    except DeadyetError as e:
        raise click.ClickException(str(e))
    _console().print(render_now(timestamp, has_dead(timestamp), next_dead_offset(timestamp), DEAD_PATTERN))


@cli.command()
@click.argument("number", type=NUMBER)
@click.option(
    "--endpoint", default=DEFAULTS.api_endpoint, envvar="DEADYET_API_ENDPOINT", show_default=True,
    help="Base URL of a running demo API.",
)
def remote(number: int, endpoint: str):
    """Ask a running demo API whether NUMBER contains DEAD."""
    url = f"{endpoint.rstrip('/')}/dead_dec/{number}"
    try:
        response = requests.get(url, timeout=10)
    except requests.RequestException as e:
        raise click.ClickException(f"Failed to reach {url}: {e}")
    if response.status_code != 200:
        raise click.ClickException(f"Failed to get {url}: {response.status_code} {response.text}")
    click.echo(response.json()["answer"])


@cli.command("demo-api")
@click.option("--host", default=DEFAULTS.api_host, envvar="DEADYET_API_HOST", help="Host to bind the server to")
@click.option("--port", default=DEFAULTS.api_port, envvar="DEADYET_API_PORT", help="Port to bind the server to")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development")
def demo_api(host: str, port: int, reload: bool):
    """Start the demo API server."""
    try:
        import uvicorn
        from demo_api.api import app
    except ImportError as e:
        click.echo(f"Error: Demo API dependencies not available: {e}")
        click.echo("Install with: pip install 'deadyet[demo]'")
        raise click.Abort()

    click.echo(f"Starting demo API server on http://{host}:{port}")
    click.echo("Available endpoints:")
    click.echo("  - GET /                          - Is it dead yet?")
    click.echo("  - GET /check/{number}/{pattern}  - Pattern check (hex)")
    click.echo("  - GET /dead_hex/{number}         - DEAD check (hex)")
    click.echo("  - GET /dead_dec/{number}         - DEAD check (decimal)")
    click.echo("  - GET /next/{number}             - Offset to the next match")
    click.echo("  - GET /matches/{start}           - Successive matches")
    click.echo("  - GET /ranges/{start}            - Ranges of matches")
    click.echo("\nPress Ctrl+C to stop the server")

    if reload:
        uvicorn.run("demo_api.api:app", host=host, port=port, reload=True)
    else:
        uvicorn.run(app, host=host, port=port, reload=False)


if __name__ == "__main__":
    cli()

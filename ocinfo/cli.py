"""oc-info CLI — summarize the active components of an OpenComponents registry."""

from __future__ import annotations

import asyncio

import click

from ocinfo import __version__
from ocinfo.aggregate import aggregate
from ocinfo.config import Settings
from ocinfo.console import Severity, echo_text, log, setup_logging
from ocinfo.errors import OcInfoError, UsageError
from ocinfo.registry.client import collect_metadata
from ocinfo.registry.models import AggregationKey
from ocinfo.report import render_body, render_header

USAGE = """Usage: oc-info https://your-registry-url.domain.com <option> [--details]

Available options:
* authors :: shows all the authors of active components
* dependencies :: shows all the node.js dependencies of active components
* plugins :: shows all the node.js plugins used by active components

Flags:
* --details :: lists the components contributing to each entry"""


def _fail_usage(ctx: click.Context, message: str | None = None) -> None:
    if message:
        log(message, Severity.ERROR)
        echo_text(USAGE, err=True)
    else:
        log(USAGE, Severity.ERROR)
    ctx.exit(1)


class OcInfoCommand(click.Command):
    """Reports argument errors with the oc-info usage text and exit status 1."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            _fail_usage(ctx, e.format_message())
            raise


@click.command(cls=OcInfoCommand, context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("url", required=False)
@click.argument("option", required=False)
@click.option("--details", is_flag=True, help="List the components contributing to each entry")
@click.option("--verbose", "-v", is_flag=True, help="Log registry requests to stderr")
@click.version_option(version=__version__)
@click.pass_context
def main(ctx: click.Context, url: str | None, option: str | None, details: bool, verbose: bool):
    """Summarize authors, dependencies or plugins across a registry.

    URL is the registry root; OPTION is one of authors, dependencies, plugins.
    """
    settings = Settings.from_env()
    settings.verbose = settings.verbose or verbose
    setup_logging(settings.verbose)

    if not url or not option:
        _fail_usage(ctx)

    try:
        key = AggregationKey.parse(option)
    except UsageError as e:
        _fail_usage(ctx, str(e))

    # Tests inject an httpx transport through the context object
    transport = (ctx.obj or {}).get("transport")

    try:
        components = asyncio.run(collect_metadata(url, settings=settings, transport=transport))
    except OcInfoError as e:
        log(str(e), Severity.ERROR)
        ctx.exit(1)

    if not components:
        log("registry lists no components", Severity.WARN)

    result = aggregate(components, key, with_details=details)

    log(render_header(result), Severity.OK)
    body = render_body(result)
    if body:
        echo_text(body)


if __name__ == "__main__":
    main()

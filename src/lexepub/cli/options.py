# ABOUTME: Shared Click options for lexepub CLI commands.
# ABOUTME: Provides the --fallback-encoding option, which yields ready-made ExtractorSettings.

import click

from lexepub.config import FALLBACK_ENCODING, ExtractorSettings


def _build_settings(
    ctx: click.Context, param: click.Parameter, value: str
) -> ExtractorSettings:
    try:
        return ExtractorSettings(fallback_encoding=value)
    except ValueError as exc:
        raise click.BadParameter(str(exc), ctx=ctx, param=param) from exc


settings_option = click.option(
    "--fallback-encoding",
    "settings",
    default=FALLBACK_ENCODING,
    show_default=True,
    callback=_build_settings,
    help="Codec tried when a content document is not valid UTF-8.",
)

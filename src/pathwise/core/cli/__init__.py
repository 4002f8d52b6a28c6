"""Pathwise CLI: entry point for the planning reports."""

import click
from loguru import logger

from pathwise import __version__
from pathwise.core.config import Config
from pathwise.core.exceptions import ConfigurationError
from pathwise.core.utils.logging import level_for_verbosity, setup_logging


@click.group()
@click.version_option(version=__version__, package_name="pathwise")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="YAML or JSON config file with planning assumptions.",
)
@click.option("-v", "--verbose", count=True, help="Increase log output (-v info, -vv debug).")
@click.pass_context
def main(ctx: click.Context, config_file: str | None, verbose: int) -> None:
    """Pathwise: plan taxes, debt payoff, house affordability and long-term wealth."""
    try:
        settings = Config(config_file=config_file).validated()
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    setup_logging(settings.logging, level=level_for_verbosity(verbose, settings.logging.level))
    logger.debug(f"Loaded settings: {settings.model_dump(mode='json')}")
    ctx.obj = settings


# Register subcommands
from .commands import budget, compare_filing, frequency, house, lump_sum, payoff, roadmap, tax, withdraw  # noqa: E402

for _command in (tax, compare_filing, budget, payoff, lump_sum, frequency, house, roadmap, withdraw):
    main.add_command(_command)

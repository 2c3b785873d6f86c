import json

import click
import tomlkit

from pooldepth.cli import cli
from pooldepth.config import CONFIG_FILE, Settings, save_config_to_file, settings


@cli.group()
def config() -> None:
    """
    Configuration commands
    """


@config.command("show")
@click.option("--json", "as_json", is_flag=True, help="Display the configuration as JSON.")
@click.option("--toml", "as_toml", is_flag=True, help="Display the configuration as TOML.")
def config_show(as_json: bool, as_toml: bool) -> None:  # noqa: FBT001
    """
    Display the active configuration. TOML is the default format.
    """

    if as_json and as_toml:
        raise click.UsageError("Choose only one of --json or --toml.")

    settings_dict = settings.model_dump(mode="json")
    if as_json:
        click.echo(json.dumps(settings_dict, indent=2))
    else:
        click.echo(tomlkit.dumps(settings_dict))


@config.command("init")
@click.option("--force", is_flag=True, help="Overwrite an existing configuration file.")
def config_init(force: bool) -> None:  # noqa: FBT001
    """
    Write a default configuration file.
    """

    if CONFIG_FILE.exists() and not force:
        raise click.ClickException(
            f"A configuration file already exists at {CONFIG_FILE}. Use --force to overwrite it."
        )

    save_config_to_file(Settings(), CONFIG_FILE)
    click.echo(f"Created a configuration file at {CONFIG_FILE}.")

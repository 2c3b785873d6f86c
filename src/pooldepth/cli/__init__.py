import click

from pooldepth.version import __version__


@click.group()
@click.version_option(version=__version__)
def cli() -> None: ...


from . import config, estimate  # noqa: F401, E402

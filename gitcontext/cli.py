#!/usr/bin/env python3

import click

from gitcontext import __version__
from gitcontext.commands.show import show_handler
from gitcontext.commands.generate import generate_handler


@click.group()
@click.version_option(version=__version__)
def cli():
    """gitcontext - Read git commit metadata without git.

    Reads HEAD, the current commit and its tags straight from the .git
    directory, for display or for baking into build-time constants.
    """
    pass


cli.add_command(show_handler, name='show')
cli.add_command(generate_handler, name='generate')


def main():
    cli()

if __name__ == "__main__":
    main()

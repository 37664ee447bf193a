"""
Handles the 'generate' command, which bakes the git context into a Python module.
"""

import asyncio
import json
import click

from ..cli_utils import standard_command, add_common_options, prepare, build_reader
from ..generator import collect, write_module


@click.command(name='generate')
@click.argument('path', required=False, type=click.Path(file_okay=False))
@click.option('-o', '--output', default=None, type=click.Path(dir_okay=False),
              help='Module to write (default: generate.output from config)')
@add_common_options('strict', 'config')
@standard_command
def generate_handler(path, output, strict, config_path):
    """Write the git context as a module of constants.

    PATH: Directory inside the repository (default: current directory)

    The module defines AUTHOR, BRANCH, DATE, HASH, IS_DETACHED, MESSAGE,
    PARENTS and TAGS. Values that cannot be read are written as None,
    False or () unless --strict is given.

    Examples:

    \b
        gitcontext generate -o mypkg/_gitcontext.py
        gitcontext generate --strict    # Fail the build outside a repository
    """
    config = prepare(config_path)
    reader = build_reader(path, strict, config)
    context = asyncio.run(collect(reader))

    destination = str(output or config.get('generate', {}).get('output', '_gitcontext.py'))
    written = write_module(destination, context)

    click.echo(json.dumps({'written': str(written), 'hash': context.hash}, ensure_ascii=False))

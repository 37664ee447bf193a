"""
Handles the 'show' command for displaying the current commit's git context.
"""

import asyncio
import json
import click

from ..cli_utils import standard_command, add_common_options, prepare, build_reader
from ..generator import collect
from ..render import render_context_table


@click.command(name='show')
@click.argument('path', required=False, type=click.Path(file_okay=False))
@click.option('--json', 'as_json', is_flag=True, help='Output a single JSON object instead of a table')
@add_common_options('strict', 'config')
@standard_command
def show_handler(path, as_json, strict, config_path):
    """Show the git context of a working tree.

    PATH: Directory inside the repository (default: current directory)

    Examples:

    \b
        gitcontext show                 # Table for the current directory
        gitcontext show ../other --json # JSON for another checkout
        gitcontext show --strict        # Fail if anything cannot be read
    """
    config = prepare(config_path)
    reader = build_reader(path, strict, config)
    context = asyncio.run(collect(reader))

    if as_json:
        click.echo(json.dumps(context.to_dict(), ensure_ascii=False))
    else:
        render_context_table(context, title="Git Context")

"""
Common CLI utilities and decorators for consistent command behavior.
"""

import json
import sys
import click
from functools import wraps
from pathlib import Path
from typing import Optional

from .config import load_config, setup_logging
from .errors import GitContextError
from .exit_codes import INTERRUPTED, get_exit_code_for_exception
from .reader import GitReader


def standard_command(func):
    """
    Decorator that provides standard CLI error handling:
    - gitcontext errors are printed to stderr as a JSON object
    - the process exits with the code mapped to the exception
    - Ctrl+C exits with INTERRUPTED
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            click.echo("Interrupted by user", err=True)
            sys.exit(INTERRUPTED)
        except click.ClickException:
            # Click exceptions already have their exit code
            raise
        except (GitContextError, OSError) as e:
            error_obj = {
                "error": str(e),
                "type": type(e).__name__,
            }
            click.echo(json.dumps(error_obj, ensure_ascii=False), err=True)
            sys.exit(get_exit_code_for_exception(e))

    return wrapper


def prepare(config_path: Optional[str]) -> dict:
    """Load configuration and configure logging for a command run."""
    config = load_config(Path(config_path) if config_path else None)
    setup_logging(config)
    return config


def build_reader(path: Optional[str], strict: bool, config: dict) -> GitReader:
    """Create a GitReader from command arguments, falling back to config."""
    reader_config = config.get('reader', {})
    strict = strict or bool(reader_config.get('strict', False))
    directory = path or reader_config.get('directory')
    if directory is not None:
        directory = str(directory)
    return GitReader(directory, throw_on_error=strict)


# Standard options that both commands share
common_options = {
    'strict': click.option('--strict', is_flag=True,
                           help='Fail on missing or malformed git data instead of using defaults'),
    'config': click.option('--config', 'config_path', type=click.Path(dir_okay=False),
                           help='Configuration file (default: .gitcontext.* or ~/.gitcontext/config.*)'),
}


def add_common_options(*option_names):
    """
    Decorator to add common options to a command.

    Example:
        @add_common_options('strict', 'config')
        def my_command(strict, config_path):
            ...
    """
    def decorator(func):
        for name in reversed(option_names):
            if name in common_options:
                func = common_options[name](func)
        return func
    return decorator

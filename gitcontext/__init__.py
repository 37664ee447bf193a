"""
gitcontext - Read git commit metadata straight from the .git directory.

gitcontext resolves HEAD, decodes the current commit and finds the tags on
it by reading loose objects directly, without running git or linking a git
library. The results are meant to be baked into build-time constants.

Quick Start:
    import asyncio
    import gitcontext

    reader = gitcontext.GitReader()          # search from the current directory
    print(asyncio.run(reader.get_commit_hash()))

    # All published fields at once
    context = gitcontext.collect_sync()
    print(context.branch, context.author, context.date)

    # Write a module of constants
    gitcontext.write_module("mypkg/_gitcontext.py", context)

Published fields:
    hash, branch, is_detached, author, date, message, parents, tags

Error handling:
    GitReader() is lenient: missing or malformed data yields None, False
    or []. GitReader(throw_on_error=True) raises NotFoundError or
    MalformedObjectError instead.
"""

__version__ = "0.3.0"

# Reader
from .reader import GitReader

# Domain objects
from .domain import HeadInfo, CommitInfo, TagInfo

# Generator
from .generator import GitContext, collect, collect_sync, render_module, write_module

# Errors
from .errors import (
    GitContextError,
    NotFoundError,
    RepositoryNotFoundError,
    ObjectNotFoundError,
    MalformedObjectError,
    ConfigError,
)

from .hashes import is_valid_hash

__all__ = [
    # Version
    "__version__",
    # Reader
    "GitReader",
    # Domain objects
    "HeadInfo",
    "CommitInfo",
    "TagInfo",
    # Generator
    "GitContext",
    "collect",
    "collect_sync",
    "render_module",
    "write_module",
    # Errors
    "GitContextError",
    "NotFoundError",
    "RepositoryNotFoundError",
    "ObjectNotFoundError",
    "MalformedObjectError",
    "ConfigError",
    # Utilities
    "is_valid_hash",
]

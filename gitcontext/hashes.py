"""
Object identifier validation.

Every hash read from HEAD, a ref file, a commit or a tag object passes
through is_valid_hash before it is used to build a path into the object store.
"""

HASH_LENGTH = 40
HEX_DIGITS = frozenset("0123456789abcdef")


def is_valid_hash(value) -> bool:
    """Return True if value is a 40 character lowercase hex SHA-1."""
    return (
        isinstance(value, str)
        and len(value) == HASH_LENGTH
        and all(c in HEX_DIGITS for c in value)
    )

"""Identifier generation."""

from uuid import uuid4


def generate_id() -> str:
    """Generate a UUID4 string for vaults, documents, nodes and edges."""
    return str(uuid4())

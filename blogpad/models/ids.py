"""Opaque identifiers for stored records."""

from nanoid import generate

ID_LENGTH = 21


def generate_id(size: int = ID_LENGTH) -> str:
    """Return a random URL-safe id."""
    return generate(size=size)

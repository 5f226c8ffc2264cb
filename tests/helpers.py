"""Shared builders for tests."""

from scripta.models import ElementType, ScreenplayElement


def make_elements(*specs):
    """Build elements from (type, content) pairs."""
    return [
        ScreenplayElement(type=ElementType(kind), content=content)
        for kind, content in specs
    ]

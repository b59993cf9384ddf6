"""
Errors
======

Exceptions raised by the simulation core.
"""

from __future__ import annotations


class InvalidColorFormat(ValueError):
    """A color string is not of the form '#rrggbb'."""

    def __init__(self, value: object):
        super().__init__(f"Invalid color '{value}': expected '#rrggbb'")
        self.value = value


class UnknownGravityPreset(KeyError):
    """A gravity preset name is not in the preset table."""

    def __init__(self, name: object, known=()):
        super().__init__(name)
        self.name = name
        self.known = tuple(known)

    def __str__(self) -> str:
        return f"Unknown gravity preset '{self.name}' (known: {', '.join(self.known)})"


class EmptyMergeTarget(AssertionError):
    """
    A merge was requested against a slot that no longer holds a particle.

    The merge scan never produces this; seeing it means the particle list was
    mutated outside of the scan.
    """

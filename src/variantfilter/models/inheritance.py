"""Modes of inheritance."""

from enum import Enum
from typing import Any


class ModeOfInheritance(str, Enum):
    """Mendelian inheritance modes a gene or variant can be compatible with.

    UNINITIALIZED means compatibility has not been computed, ANY means no
    particular mode was requested.
    """

    AUTOSOMAL_DOMINANT = "AUTOSOMAL_DOMINANT"
    AUTOSOMAL_RECESSIVE = "AUTOSOMAL_RECESSIVE"
    X_DOMINANT = "X_DOMINANT"
    X_RECESSIVE = "X_RECESSIVE"
    MITOCHONDRIAL = "MITOCHONDRIAL"
    ANY = "ANY"
    UNINITIALIZED = "UNINITIALIZED"

    def is_specified(self) -> bool:
        return self not in (ModeOfInheritance.ANY, ModeOfInheritance.UNINITIALIZED)


def as_mode_set(value: Any) -> Any:
    """Wrap a single mode, given as a member or its name, into a one-element list."""
    if isinstance(value, (str, ModeOfInheritance)):
        return [value]
    return value

"""Molecular descriptors.

Each module registers its descriptors with the global registry on import.
"""

from .hbond_acceptors import HBondAcceptorCounter, HBondAcceptorCountDescriptor
from .whim import WHIMDescriptor, WhimScheme

__all__ = [
    "HBondAcceptorCounter",
    "HBondAcceptorCountDescriptor",
    "WHIMDescriptor",
    "WhimScheme",
]

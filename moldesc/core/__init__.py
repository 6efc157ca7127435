"""Core module for MolDesc library.

This module contains the molecular graph model, the descriptor base classes
and the registry.
"""

from .base import BaseDescriptor, DescriptorValue, DescriptorSpecification
from .molecule import Atom, Bond, BondOrder, Molecule
from .registry import MolDescriptor, register_descriptor
from .exceptions import MolDescError, DescriptorNotFoundError, InvalidSMILESError
from .config import Config

__all__ = [
    "BaseDescriptor",
    "DescriptorValue",
    "DescriptorSpecification",
    "Atom",
    "Bond",
    "BondOrder",
    "Molecule",
    "MolDescriptor",
    "register_descriptor",
    "MolDescError",
    "DescriptorNotFoundError",
    "InvalidSMILESError",
    "Config",
]

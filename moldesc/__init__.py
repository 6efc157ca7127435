"""MolDesc - molecular descriptors for tabular molecule data

Descriptor calculators that work on a molecule's atom-bond graph, and table
nodes that append their results to a pandas DataFrame.
"""

__version__ = "0.1.0"
__author__ = "MolDesc Team"
__email__ = "moldesc@example.com"

# Core imports
from .core.base import BaseDescriptor, DescriptorValue, DescriptorSpecification
from .core.molecule import Atom, Bond, BondOrder, Molecule, as_molecule
from .core.registry import MolDescriptor, register_descriptor
from .core.exceptions import (
    MolDescError,
    DescriptorNotFoundError,
    InvalidSMILESError,
    InvalidStructureError,
    InvalidSettingsError,
    CalculationError,
)
from .core.config import Config

# Descriptors
from .descriptors.hbond_acceptors import (
    HBondAcceptorCounter,
    HBondAcceptorCountDescriptor,
    count_hbond_acceptors,
)
from .descriptors.whim import WHIMDescriptor, WhimScheme

# Table nodes
from .nodes import HBondAcceptorNode, WhimNode, WhimSettings, NodeSettings

__all__ = [
    # Core
    "BaseDescriptor",
    "DescriptorValue",
    "DescriptorSpecification",
    "Atom",
    "Bond",
    "BondOrder",
    "Molecule",
    "as_molecule",
    "MolDescriptor",
    "register_descriptor",
    "Config",

    # Errors
    "MolDescError",
    "DescriptorNotFoundError",
    "InvalidSMILESError",
    "InvalidStructureError",
    "InvalidSettingsError",
    "CalculationError",

    # Descriptors
    "HBondAcceptorCounter",
    "HBondAcceptorCountDescriptor",
    "count_hbond_acceptors",
    "WHIMDescriptor",
    "WhimScheme",

    # Nodes
    "HBondAcceptorNode",
    "WhimNode",
    "WhimSettings",
    "NodeSettings",
]

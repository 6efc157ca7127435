"""Table nodes that append descriptor columns to a molecule DataFrame."""

from .base import ColumnSpec, NodeModel, NodeSettings
from .hbond_acceptors import HBondAcceptorNode
from .whim import WhimNode, WhimSettings

# Descriptor registry names mapped to the node that serves them
NODES = {
    'hbond_acceptors': HBondAcceptorNode,
    'nHBAcc': HBondAcceptorNode,
    'whim': WhimNode,
}

__all__ = [
    "ColumnSpec",
    "NodeModel",
    "NodeSettings",
    "HBondAcceptorNode",
    "WhimNode",
    "WhimSettings",
    "NODES",
]

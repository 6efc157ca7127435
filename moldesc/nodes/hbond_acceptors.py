"""Node appending the hydrogen bond acceptor count to a molecule table."""

from typing import Any, List

from moldesc.core.molecule import Molecule
from moldesc.descriptors.hbond_acceptors import HBondAcceptorCountDescriptor, HBondAcceptorCounter
from .base import ColumnSpec, NodeModel


class HBondAcceptorNode(NodeModel):
    """Appends an integer ``nHBAcc`` column."""

    def __init__(self, settings=None) -> None:
        super().__init__(settings)
        self._counter = HBondAcceptorCounter()

    def create_output_column_specs(self) -> List[ColumnSpec]:
        return [ColumnSpec(name, "Int64") for name in HBondAcceptorCountDescriptor.NAMES]

    def compute_cells(self, molecule: Molecule) -> List[Any]:
        return [self._counter.count(molecule)]

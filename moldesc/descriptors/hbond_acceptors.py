"""Hydrogen bond acceptor count.

Counts nitrogen and oxygen atoms that can accept a hydrogen bond, using the
heuristic described in the Blue Obelisk chemoinformatics algorithm ontology:

* A nitrogen with formal charge <= 0 is an acceptor unless it is bonded to an
  oxygen, or it is aromatic and carries no double bond (its lone pair is part
  of the ring system).
* An oxygen with formal charge <= 0 is an acceptor unless it is bonded to a
  nitrogen or to an aromatic carbon.
"""

from typing import List

from moldesc.core.base import BaseDescriptor, DescriptorSpecification
from moldesc.core.molecule import Atom, BondOrder, Molecule
from moldesc.core.registry import register_descriptor


class HBondAcceptorCounter:
    """Stateless hydrogen bond acceptor counting rule."""

    def count(self, molecule: Molecule) -> int:
        """
        Count the hydrogen bond acceptor atoms of a molecule.

        Args:
            molecule: Molecular graph

        Returns:
            Number of acceptor atoms
        """
        return sum(1 for atom in molecule.atoms if self.is_acceptor(molecule, atom))

    def is_acceptor(self, molecule: Molecule, atom: Atom) -> bool:
        if atom.formal_charge > 0:
            return False
        if atom.symbol == "N":
            return self._is_nitrogen_acceptor(molecule, atom)
        if atom.symbol == "O":
            return self._is_oxygen_acceptor(molecule, atom)
        return False

    @staticmethod
    def _is_nitrogen_acceptor(molecule: Molecule, atom: Atom) -> bool:
        n_pi_bonds = 0
        for bond in molecule.get_connected_bonds(atom):
            if bond.get_connected_atom(atom).symbol == "O":
                return False
            if bond.order is BondOrder.DOUBLE:
                n_pi_bonds += 1

        # an aromatic nitrogen without a double bond has its lone pair in the ring
        return not (atom.aromatic and n_pi_bonds == 0)

    @staticmethod
    def _is_oxygen_acceptor(molecule: Molecule, atom: Atom) -> bool:
        for neighbour in molecule.get_connected_atoms(atom):
            if neighbour.symbol == "N":
                return False
            if neighbour.symbol == "C" and neighbour.aromatic:
                return False
        return True


def count_hbond_acceptors(molecule: Molecule) -> int:
    return HBondAcceptorCounter().count(molecule)


@register_descriptor('hbond_acceptors', 'nHBAcc')
class HBondAcceptorCountDescriptor(BaseDescriptor):
    """Number of hydrogen bond acceptors (nHBAcc).

    The descriptor takes no parameters.
    """

    NAMES = ["nHBAcc"]
    SPECIFICATION = DescriptorSpecification(
        reference="http://www.blueobelisk.org/ontologies/chemoinformatics-algorithms/#hBondacceptors",
        implementation_title="moldesc.descriptors.hbond_acceptors.HBondAcceptorCountDescriptor",
    )

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._counter = HBondAcceptorCounter()

    def _calculate(self, molecule: Molecule) -> int:
        return self._counter.count(molecule)

    def get_descriptor_names(self) -> List[str]:
        return list(self.NAMES)

    def get_specification(self) -> DescriptorSpecification:
        return self.SPECIFICATION

    def __repr__(self) -> str:
        return "HBondAcceptorCountDescriptor(names=['nHBAcc'])"

"""Molecular graph model used by all descriptors.

A :class:`Molecule` owns its atoms and bonds. Bonds borrow their endpoint
atoms from the molecule; an atom is identified by reference, so two atoms with
identical attributes are still distinct nodes of the graph.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

import numpy as np

from .exceptions import (
    CalculationError,
    DependencyError,
    InvalidSMILESError,
    InvalidStructureError,
)

try:
    from rdkit import Chem
    from rdkit.Chem import AllChem
    HAS_RDKIT = True
except ImportError:
    HAS_RDKIT = False
    Chem = None  # type: ignore
    AllChem = None  # type: ignore


Point3D = Tuple[float, float, float]

DEFAULT_EMBED_SEED = 0xF00D


class BondOrder(Enum):
    """Bond orders understood by the descriptors."""
    UNSET = "unset"
    SINGLE = "single"
    DOUBLE = "double"
    TRIPLE = "triple"
    QUADRUPLE = "quadruple"
    AROMATIC = "aromatic"


@dataclass(eq=False)
class Atom:
    """A single atom node."""
    symbol: str
    formal_charge: int = 0
    aromatic: bool = False
    point3d: Optional[Point3D] = None

    def __repr__(self) -> str:
        charge = f"{self.formal_charge:+d}" if self.formal_charge else ""
        flag = ", aromatic" if self.aromatic else ""
        return f"Atom({self.symbol}{charge}{flag})"


@dataclass(eq=False)
class Bond:
    """An undirected edge between two atoms of the same molecule."""
    begin: Atom
    end: Atom
    order: BondOrder = BondOrder.SINGLE

    @property
    def atoms(self) -> Tuple[Atom, Atom]:
        return self.begin, self.end

    def contains(self, atom: Atom) -> bool:
        return atom is self.begin or atom is self.end

    def get_connected_atom(self, atom: Atom) -> Atom:
        """
        Get the endpoint on the other side of ``atom``.

        Args:
            atom: One of the two endpoints of this bond

        Returns:
            The other endpoint

        Raises:
            InvalidStructureError: If ``atom`` is not an endpoint of this bond
        """
        if atom is self.begin:
            return self.end
        if atom is self.end:
            return self.begin
        raise InvalidStructureError(f"{atom!r} is not an endpoint of this bond")

    def __repr__(self) -> str:
        return f"Bond({self.begin.symbol}-{self.end.symbol}, {self.order.name})"


@dataclass(eq=False)
class Molecule:
    """An undirected labeled graph of atoms and bonds."""
    atoms: List[Atom] = field(default_factory=list)
    bonds: List[Bond] = field(default_factory=list)
    title: Optional[str] = None

    def __post_init__(self) -> None:
        self.atoms = list(self.atoms)
        self.bonds = list(self.bonds)
        self._members = set()
        self._adjacency: Dict[Atom, List[Bond]] = {}

        for atom in self.atoms:
            self._register_atom(atom)
        for bond in self.bonds:
            self._register_bond(bond)

    def _register_atom(self, atom: Atom) -> None:
        if not isinstance(atom, Atom):
            raise InvalidStructureError(f"expected an Atom, got {type(atom).__name__}")
        if not atom.symbol:
            raise InvalidStructureError("atom without an element symbol")
        if atom in self._members:
            raise InvalidStructureError(f"{atom!r} added to the molecule twice")
        self._members.add(atom)
        self._adjacency[atom] = []

    def _register_bond(self, bond: Bond) -> None:
        for atom in bond.atoms:
            if atom not in self._members:
                raise InvalidStructureError(
                    f"bond endpoint {atom!r} does not belong to the molecule")
        if bond.begin is bond.end:
            raise InvalidStructureError(f"bond connects {bond.begin!r} to itself")
        self._adjacency[bond.begin].append(bond)
        self._adjacency[bond.end].append(bond)

    def add_atom(self, atom: Atom) -> Atom:
        self._register_atom(atom)
        self.atoms.append(atom)
        return atom

    def add_bond(self, begin: Atom, end: Atom,
                 order: BondOrder = BondOrder.SINGLE) -> Bond:
        bond = Bond(begin, end, order)
        self._register_bond(bond)
        self.bonds.append(bond)
        return bond

    @property
    def atom_count(self) -> int:
        return len(self.atoms)

    @property
    def bond_count(self) -> int:
        return len(self.bonds)

    def contains(self, atom: Atom) -> bool:
        return atom in self._members

    def get_connected_bonds(self, atom: Atom) -> List[Bond]:
        """
        List the bonds incident to an atom.

        Raises:
            InvalidStructureError: If the atom is not part of this molecule
        """
        try:
            return list(self._adjacency[atom])
        except KeyError:
            raise InvalidStructureError(f"{atom!r} does not belong to the molecule")

    def get_connected_atoms(self, atom: Atom) -> List[Atom]:
        """List the atoms directly bonded to an atom."""
        return [bond.get_connected_atom(atom) for bond in self.get_connected_bonds(atom)]

    def has_3d_coordinates(self) -> bool:
        return bool(self.atoms) and all(atom.point3d is not None for atom in self.atoms)

    def coordinates(self) -> np.ndarray:
        """
        Get the 3D coordinates of all atoms.

        Returns:
            Array of shape (n_atoms, 3)

        Raises:
            InvalidStructureError: If any atom has no 3D point
        """
        missing = [i for i, atom in enumerate(self.atoms) if atom.point3d is None]
        if missing:
            raise InvalidStructureError(
                f"{len(missing)} atom(s) without 3D coordinates (first index {missing[0]})")
        return np.array([atom.point3d for atom in self.atoms], dtype=np.float64).reshape(-1, 3)

    @classmethod
    def from_rdkit(cls, mol: "Chem.Mol", title: Optional[str] = None) -> "Molecule":
        """
        Build a molecule from an RDKit molecule.

        Symbols, formal charges, aromatic flags and bond orders are copied.
        Positions are copied from the first conformer when one exists.

        Args:
            mol: RDKit molecule object
            title: Optional molecule name

        Returns:
            New Molecule instance
        """
        if mol is None:
            raise InvalidStructureError("RDKit molecule is None")

        conformer = mol.GetConformer() if mol.GetNumConformers() > 0 else None
        atoms = []
        for rd_atom in mol.GetAtoms():
            point = None
            if conformer is not None:
                pos = conformer.GetAtomPosition(rd_atom.GetIdx())
                point = (pos.x, pos.y, pos.z)
            atoms.append(Atom(
                symbol=rd_atom.GetSymbol(),
                formal_charge=rd_atom.GetFormalCharge(),
                aromatic=rd_atom.GetIsAromatic(),
                point3d=point,
            ))

        bonds = []
        for rd_bond in mol.GetBonds():
            bonds.append(Bond(
                atoms[rd_bond.GetBeginAtomIdx()],
                atoms[rd_bond.GetEndAtomIdx()],
                _bond_order_from_rdkit(rd_bond.GetBondType()),
            ))

        if title is None and mol.HasProp("_Name"):
            title = mol.GetProp("_Name") or None
        return cls(atoms, bonds, title=title)

    @classmethod
    def from_smiles(cls, smiles: str, embed_3d: bool = False,
                    random_seed: int = DEFAULT_EMBED_SEED) -> "Molecule":
        """
        Parse a SMILES string into a molecule.

        Args:
            smiles: SMILES string
            embed_3d: Generate a 3D conformer (ETKDG) for the heavy atoms
            random_seed: Seed for the conformer embedding

        Returns:
            New Molecule instance

        Raises:
            InvalidSMILESError: If the SMILES cannot be parsed
            CalculationError: If 3D embedding fails
        """
        return cls.from_rdkit(parse_smiles(smiles, embed_3d=embed_3d, random_seed=random_seed))

    def __repr__(self) -> str:
        name = f"'{self.title}', " if self.title else ""
        return f"Molecule({name}atoms={self.atom_count}, bonds={self.bond_count})"


MoleculeLike = Union[Molecule, str, "Chem.Mol"]


def _require_rdkit() -> None:
    if not HAS_RDKIT:
        raise DependencyError("rdkit")


def _bond_order_from_rdkit(bond_type) -> BondOrder:
    mapping = {
        Chem.BondType.SINGLE: BondOrder.SINGLE,
        Chem.BondType.DOUBLE: BondOrder.DOUBLE,
        Chem.BondType.TRIPLE: BondOrder.TRIPLE,
        Chem.BondType.QUADRUPLE: BondOrder.QUADRUPLE,
        Chem.BondType.AROMATIC: BondOrder.AROMATIC,
    }
    return mapping.get(bond_type, BondOrder.UNSET)


def parse_smiles(smiles: str, embed_3d: bool = False,
                 random_seed: int = DEFAULT_EMBED_SEED) -> "Chem.Mol":
    """Parse a SMILES string with RDKit, optionally embedding a 3D conformer."""
    _require_rdkit()

    if not isinstance(smiles, str) or not smiles.strip():
        raise InvalidSMILESError(str(smiles), "Empty SMILES")

    mol = Chem.MolFromSmiles(smiles)
    if mol is None or mol.GetNumAtoms() == 0:
        raise InvalidSMILESError(smiles, "Could not parse SMILES")

    if embed_3d:
        mol = embed_conformer(mol, random_seed=random_seed, label=smiles)
    return mol


def embed_conformer(mol: "Chem.Mol", random_seed: int = DEFAULT_EMBED_SEED,
                    label: Optional[str] = None) -> "Chem.Mol":
    """Embed a 3D conformer; hydrogens are added for the embedding and removed afterwards."""
    _require_rdkit()

    mol_h = Chem.AddHs(mol)
    params = AllChem.ETKDGv3()
    params.randomSeed = random_seed
    if AllChem.EmbedMolecule(mol_h, params) != 0:
        raise CalculationError("3D embedding", f"no conformer for '{label or Chem.MolToSmiles(mol)}'")
    return Chem.RemoveHs(mol_h)


def as_molecule(obj: MoleculeLike, embed_3d: bool = False,
                random_seed: int = DEFAULT_EMBED_SEED) -> Molecule:
    """
    Coerce a Molecule, RDKit molecule or SMILES string into a Molecule.

    Args:
        obj: Input molecule
        embed_3d: Embed a 3D conformer when the input carries no coordinates
        random_seed: Seed for the conformer embedding

    Returns:
        Molecule instance
    """
    if isinstance(obj, Molecule):
        return obj
    if isinstance(obj, str):
        return Molecule.from_smiles(obj, embed_3d=embed_3d, random_seed=random_seed)
    if HAS_RDKIT and isinstance(obj, Chem.Mol):
        if embed_3d and obj.GetNumConformers() == 0:
            obj = embed_conformer(obj, random_seed=random_seed)
        return Molecule.from_rdkit(obj)
    raise TypeError(f"Cannot convert {type(obj).__name__} to Molecule")


def is_molecule_like(obj) -> bool:
    """Check whether a table cell value can be turned into a Molecule."""
    if isinstance(obj, (Molecule, str)):
        return True
    return HAS_RDKIT and isinstance(obj, Chem.Mol)

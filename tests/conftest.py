"""Shared test configuration and fixtures for MolDesc tests."""

import pytest
import tempfile
from typing import Dict, List

import pandas as pd

from moldesc.core.molecule import Atom, BondOrder, Molecule

# Test data
SAMPLE_SMILES = [
    "CCO",  # ethanol
    "CC(=O)O",  # acetic acid
    "c1ccccc1",  # benzene
    "CCN(CC)CC",  # triethylamine
    "c1ccncc1",  # pyridine
    "c1cc[nH]c1",  # pyrrole
    "Oc1ccccc1",  # phenol
    "C[N+](=O)[O-]",  # nitromethane
]

INVALID_SMILES = [
    "invalid_smiles",
    "C(C(C",  # unmatched parentheses
    "C1CC",  # incomplete ring
    "",  # empty string
]

EXPECTED_ACCEPTORS: Dict[str, int] = {
    "CCO": 1,
    "CC(=O)O": 2,
    "c1ccccc1": 0,
    "CCN(CC)CC": 1,
    "c1ccncc1": 0,
    "c1cc[nH]c1": 0,
    "Oc1ccccc1": 0,
    "C[N+](=O)[O-]": 0,
}


@pytest.fixture
def sample_smiles() -> List[str]:
    """Provide sample SMILES strings for testing."""
    return SAMPLE_SMILES.copy()


@pytest.fixture
def invalid_smiles() -> List[str]:
    """Provide invalid SMILES strings for testing."""
    return INVALID_SMILES.copy()


@pytest.fixture
def expected_acceptors() -> Dict[str, int]:
    return dict(EXPECTED_ACCEPTORS)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def acetic_acid() -> Molecule:
    """Acetic acid built by hand: CH3-C(=O)-OH without hydrogens."""
    mol = Molecule(title="acetic acid")
    methyl = mol.add_atom(Atom("C"))
    carbonyl = mol.add_atom(Atom("C"))
    oxo = mol.add_atom(Atom("O"))
    hydroxyl = mol.add_atom(Atom("O"))
    mol.add_bond(methyl, carbonyl)
    mol.add_bond(carbonyl, oxo, BondOrder.DOUBLE)
    mol.add_bond(carbonyl, hydroxyl)
    return mol


@pytest.fixture
def pyridine() -> Molecule:
    """Pyridine with aromatic ring bonds."""
    mol = Molecule(title="pyridine")
    ring = [mol.add_atom(Atom("N", aromatic=True))]
    ring += [mol.add_atom(Atom("C", aromatic=True)) for _ in range(5)]
    for i, atom in enumerate(ring):
        mol.add_bond(atom, ring[(i + 1) % len(ring)], BondOrder.AROMATIC)
    return mol


@pytest.fixture
def linear_pair() -> Molecule:
    """Two carbons at (-1, 0, 0) and (1, 0, 0)."""
    mol = Molecule()
    left = mol.add_atom(Atom("C", point3d=(-1.0, 0.0, 0.0)))
    right = mol.add_atom(Atom("C", point3d=(1.0, 0.0, 0.0)))
    mol.add_bond(left, right)
    return mol


@pytest.fixture
def smiles_table() -> pd.DataFrame:
    return pd.DataFrame({
        "name": ["ethanol", "acetic acid", "pyridine"],
        "smiles": ["CCO", "CC(=O)O", "c1ccncc1"],
    })


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as integration test"
    )
    config.addinivalue_line(
        "markers", "unit: mark test as unit test"
    )
    config.addinivalue_line(
        "markers", "rdkit: mark test as requiring RDKit"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers automatically."""
    for item in items:
        # Add unit marker to all tests by default
        if not any(marker.name in ["integration", "slow"]
                   for marker in item.iter_markers()):
            item.add_marker(pytest.mark.unit)

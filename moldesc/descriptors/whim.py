"""WHIM (Weighted Holistic Invariant Molecular) descriptors.

Holistic 3D descriptors described by Todeschini et al. The atom coordinates
are centred on their weighted centroid and projected onto the principal axes
of the weighted covariance matrix. Seventeen statistics of those projections
describe size, shape, symmetry and atom distribution. Five atom weighting
schemes are available.
"""

import math
from enum import Enum
from typing import Dict, List

import numpy as np

from moldesc.core.base import BaseDescriptor, DescriptorSpecification
from moldesc.core.exceptions import CalculationError, DescriptorInitializationError
from moldesc.core.molecule import Molecule
from moldesc.core.registry import register_descriptor


# Atomic properties scaled on carbon
SCALED_ATOMIC_MASSES: Dict[str, float] = {
    "H": 0.084, "B": 0.900, "C": 1.000, "N": 1.166, "O": 1.332, "F": 1.582,
    "Al": 2.246, "Si": 2.339, "P": 2.579, "S": 2.670, "Cl": 2.952, "Fe": 4.650,
    "Co": 4.907, "Ni": 4.887, "Cu": 5.291, "Zn": 5.445, "Br": 6.653, "Sn": 9.884,
    "I": 10.566,
}

SCALED_VDW_VOLUMES: Dict[str, float] = {
    "H": 0.299, "B": 0.796, "C": 1.000, "N": 0.695, "O": 0.512, "F": 0.410,
    "Al": 1.626, "Si": 1.424, "P": 1.181, "S": 1.088, "Cl": 1.035, "Fe": 1.829,
    "Co": 1.561, "Ni": 0.764, "Cu": 0.512, "Zn": 1.708, "Br": 1.384, "Sn": 2.042,
    "I": 1.728,
}

SCALED_ELECTRONEGATIVITIES: Dict[str, float] = {
    "H": 0.944, "B": 0.828, "C": 1.000, "N": 1.163, "O": 1.331, "F": 1.457,
    "Al": 0.624, "Si": 0.779, "P": 0.916, "S": 1.077, "Cl": 1.265, "Fe": 0.728,
    "Co": 0.728, "Ni": 0.728, "Cu": 0.740, "Zn": 0.810, "Br": 1.172, "Sn": 0.837,
    "I": 1.012,
}

SCALED_POLARIZABILITIES: Dict[str, float] = {
    "H": 0.379, "B": 1.722, "C": 1.000, "N": 0.625, "O": 0.456, "F": 0.316,
    "Al": 3.864, "Si": 3.057, "P": 2.063, "S": 1.648, "Cl": 1.239, "Fe": 4.773,
    "Co": 4.261, "Ni": 3.864, "Cu": 3.466, "Zn": 4.034, "Br": 1.733, "Sn": 4.375,
    "I": 3.040,
}

# Scores closer than this are considered mirror images
SYMMETRY_TOLERANCE = 0.01

WHIM_NAMES = [
    "Wlambda1", "Wlambda2", "Wlambda3",
    "Wnu1", "Wnu2",
    "Wgamma1", "Wgamma2", "Wgamma3",
    "Weta1", "Weta2", "Weta3",
    "WT", "WA", "WV", "WK", "WG", "WD",
]


class WhimScheme(Enum):
    """Atom weighting schemes, in the order the table node appends them."""
    UNITY_WEIGHTS = ("unity", "WHIM Unity Weights")
    ATOMIC_MASSES = ("mass", "WHIM Atomic Masses")
    ATOMIC_POLARIZABILITIES = ("polar", "WHIM Atomic Polarizabilities")
    VDW_VOLUMES = ("volume", "WHIM VdW Volumes")
    ATOMIC_ELECTRONEGATIVITIES = ("eneg", "WHIM Atomic Electronegativities")

    def __init__(self, key: str, title: str) -> None:
        self.key = key
        self.title = title

    @classmethod
    def from_key(cls, key: str) -> "WhimScheme":
        for scheme in cls:
            if scheme.key == key:
                return scheme
        raise ValueError(
            f"Unknown WHIM scheme '{key}'. Available schemes: {', '.join(s.key for s in cls)}")

    @property
    def weights(self) -> Dict[str, float]:
        return _SCHEME_TABLES.get(self, {})


_SCHEME_TABLES = {
    WhimScheme.ATOMIC_MASSES: SCALED_ATOMIC_MASSES,
    WhimScheme.ATOMIC_POLARIZABILITIES: SCALED_POLARIZABILITIES,
    WhimScheme.VDW_VOLUMES: SCALED_VDW_VOLUMES,
    WhimScheme.ATOMIC_ELECTRONEGATIVITIES: SCALED_ELECTRONEGATIVITIES,
}


def symmetry_index(scores: np.ndarray, tolerance: float = SYMMETRY_TOLERANCE) -> float:
    """
    Information-content symmetry of the scores along one principal axis.

    An atom is symmetric when it lies on the axis origin or when an unpaired
    atom sits at the mirrored position.

    Args:
        scores: Projections of all atoms onto one principal axis
        tolerance: Absolute tolerance for matching positions

    Returns:
        Symmetry index in (0, 1]; 1 means fully symmetric
    """
    n = len(scores)
    paired = np.zeros(n, dtype=bool)
    for i in range(n):
        if paired[i]:
            continue
        if abs(scores[i]) < tolerance:
            paired[i] = True
            continue
        for j in range(i + 1, n):
            if not paired[j] and abs(scores[i] + scores[j]) < tolerance:
                paired[i] = paired[j] = True
                break

    n_symmetric = int(paired.sum())
    n_asymmetric = n - n_symmetric

    information = 0.0
    if n_symmetric > 0:
        information -= (n_symmetric / n) * math.log2(n_symmetric / n)
    if n_asymmetric > 0:
        information -= n_asymmetric * (1.0 / n) * math.log2(1.0 / n)
    return 1.0 / (1.0 + information)


def compute_whim(coordinates: np.ndarray, weights: np.ndarray,
                 tolerance: float = SYMMETRY_TOLERANCE) -> np.ndarray:
    """
    Compute the 17 WHIM descriptors of a weighted point cloud.

    Args:
        coordinates: Array of shape (n_atoms, 3)
        weights: Positive weight per atom

    Returns:
        Array ordered as ``WHIM_NAMES``
    """
    n = coordinates.shape[0]
    total_weight = weights.sum()

    centred = coordinates - np.average(coordinates, axis=0, weights=weights)
    covariance = (centred * weights[:, np.newaxis]).T @ centred / total_weight

    eigenvalues, eigenvectors = np.linalg.eigh(covariance)
    order = np.argsort(eigenvalues)[::-1]
    lambdas = np.clip(eigenvalues[order], 0.0, None)
    scores = centred @ eigenvectors[:, order]

    total = lambdas.sum()
    if total > 0:
        nu = lambdas / total
        shape = np.abs(nu - 1.0 / 3.0).sum() / (4.0 / 3.0)
    else:
        nu = np.zeros(3)
        shape = 0.0

    gamma = np.array([symmetry_index(scores[:, m], tolerance) for m in range(3)])

    fourth_moments = (scores ** 4).sum(axis=0)
    eta = np.divide(n * lambdas ** 2, fourth_moments,
                    out=np.zeros(3), where=fourth_moments > 0)

    l1, l2, l3 = lambdas
    area = l1 * l2 + l1 * l3 + l2 * l3
    volume = area + total + l1 * l2 * l3

    return np.array([
        l1, l2, l3,
        nu[0], nu[1],
        gamma[0], gamma[1], gamma[2],
        eta[0], eta[1], eta[2],
        total, area, volume, shape,
        float(np.prod(gamma) ** (1.0 / 3.0)),
        eta.sum(),
    ], dtype=np.float64)


@register_descriptor('whim')
class WHIMDescriptor(BaseDescriptor):
    """WHIM descriptors for one atom weighting scheme.

    Requires 3D coordinates; SMILES input is embedded with RDKit.
    """

    requires_3d = True

    SPECIFICATION = DescriptorSpecification(
        reference="http://www.blueobelisk.org/ontologies/chemoinformatics-algorithms/#WHIM",
        implementation_title="moldesc.descriptors.whim.WHIMDescriptor",
    )

    def __init__(self, scheme: str = "unity", **kwargs) -> None:
        """
        Initialize WHIM descriptor.

        Args:
            scheme: Weighting scheme key: 'unity', 'mass', 'polar', 'volume' or 'eneg'
            **kwargs: Additional parameters passed to BaseDescriptor
        """
        try:
            self.scheme = scheme if isinstance(scheme, WhimScheme) else WhimScheme.from_key(scheme)
        except ValueError as e:
            raise DescriptorInitializationError("whim", str(e))
        super().__init__(**kwargs)

    def atom_weights(self, molecule: Molecule) -> np.ndarray:
        if self.scheme is WhimScheme.UNITY_WEIGHTS:
            return np.ones(molecule.atom_count)

        table = self.scheme.weights
        missing = sorted({atom.symbol for atom in molecule.atoms if atom.symbol not in table})
        if missing:
            raise CalculationError(
                self.name, f"no {self.scheme.key} weight for element(s) {', '.join(missing)}")
        return np.array([table[atom.symbol] for atom in molecule.atoms], dtype=np.float64)

    def _calculate(self, molecule: Molecule) -> np.ndarray:
        if molecule.atom_count == 0:
            raise CalculationError(self.name, "molecule has no atoms")
        return compute_whim(molecule.coordinates(), self.atom_weights(molecule))

    def get_descriptor_names(self) -> List[str]:
        return list(WHIM_NAMES)

    def get_specification(self) -> DescriptorSpecification:
        return self.SPECIFICATION

    def get_parameter_names(self) -> List[str]:
        return ["scheme"]

    def get_parameters(self) -> List[str]:
        return [self.scheme.key]

    def __repr__(self) -> str:
        return f"WHIMDescriptor(scheme='{self.scheme.key}', output_dim={len(WHIM_NAMES)})"

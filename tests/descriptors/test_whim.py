"""Tests for WHIM descriptors."""

import math

import pytest
import numpy as np

from moldesc.core.exceptions import (
    CalculationError,
    DescriptorInitializationError,
    InvalidStructureError,
)
from moldesc.core.molecule import Atom, Molecule
from moldesc.descriptors.whim import (
    WHIM_NAMES,
    WHIMDescriptor,
    WhimScheme,
    compute_whim,
    symmetry_index,
)


def _index(name):
    return WHIM_NAMES.index(name)


def _cloud(symbols, coordinates):
    return Molecule([Atom(s, point3d=tuple(p)) for s, p in zip(symbols, coordinates)])


class TestSymmetryIndex:
    """Tests for the symmetry statistic."""

    def test_mirrored_scores(self):
        assert symmetry_index(np.array([-1.0, 1.0])) == 1.0

    def test_scores_on_origin(self):
        assert symmetry_index(np.zeros(4)) == 1.0

    def test_asymmetric_scores(self):
        expected = 1.0 / (1.0 + math.log2(3))
        assert symmetry_index(np.array([1.0, 2.0, 3.0])) == pytest.approx(expected)

    def test_partial_symmetry(self):
        # two mirrored atoms and one unmatched atom
        n_s, n = 2, 3
        information = -(n_s / n) * math.log2(n_s / n) - (1.0 / n) * math.log2(1.0 / n)
        result = symmetry_index(np.array([-1.0, 1.0, 2.5]))
        assert result == pytest.approx(1.0 / (1.0 + information))

    def test_each_atom_paired_once(self):
        # three atoms at +1 cannot all pair with one atom at -1
        result = symmetry_index(np.array([1.0, 1.0, -1.0, 1.0]))
        assert result < 1.0


class TestComputeWhim:
    """Tests for the WHIM statistics."""

    def test_linear_pair(self, linear_pair):
        values = compute_whim(linear_pair.coordinates(), np.ones(2))
        expected = {
            "Wlambda1": 1.0, "Wlambda2": 0.0, "Wlambda3": 0.0,
            "Wnu1": 1.0, "Wnu2": 0.0,
            "Wgamma1": 1.0, "Wgamma2": 1.0, "Wgamma3": 1.0,
            "Weta1": 1.0, "Weta2": 0.0, "Weta3": 0.0,
            "WT": 1.0, "WA": 0.0, "WV": 1.0, "WK": 1.0, "WG": 1.0, "WD": 1.0,
        }
        for name, value in expected.items():
            assert values[_index(name)] == pytest.approx(value, abs=1e-9), name

    def test_single_atom(self):
        values = compute_whim(np.zeros((1, 3)), np.ones(1))
        assert values.shape == (17,)
        assert values[_index("WT")] == 0.0
        assert values[_index("WK")] == 0.0
        assert values[_index("WG")] == 1.0

    def test_eigenvalues_sorted(self):
        rng = np.random.default_rng(3)
        values = compute_whim(rng.normal(size=(12, 3)) * [3.0, 1.0, 0.2], np.ones(12))
        lambdas = values[:3]
        assert lambdas[0] >= lambdas[1] >= lambdas[2] >= 0.0
        assert values[_index("WT")] == pytest.approx(lambdas.sum())
        assert values[_index("Wnu1")] + values[_index("Wnu2")] <= 1.0

    def test_rotation_and_translation_invariance(self):
        rng = np.random.default_rng(11)
        coords = rng.normal(size=(10, 3))
        weights = rng.uniform(0.5, 2.0, size=10)
        rotation, _ = np.linalg.qr(rng.normal(size=(3, 3)))
        moved = coords @ rotation.T + [4.0, -2.0, 7.5]

        original = compute_whim(coords, weights)
        transformed = compute_whim(moved, weights)
        invariant = ["Wlambda1", "Wlambda2", "Wlambda3", "Wnu1", "Wnu2",
                     "Weta1", "Weta2", "Weta3", "WT", "WA", "WV", "WK", "WD"]
        for name in invariant:
            assert transformed[_index(name)] == pytest.approx(original[_index(name)], rel=1e-6), name


class TestWHIMDescriptor:
    """Tests for the WHIM descriptor wrapper."""

    def test_default_scheme(self):
        descriptor = WHIMDescriptor()
        assert descriptor.scheme is WhimScheme.UNITY_WEIGHTS
        assert descriptor.get_parameter_names() == ["scheme"]
        assert descriptor.get_parameters() == ["unity"]
        assert descriptor.get_descriptor_names() == WHIM_NAMES
        assert descriptor.get_output_dim() == 17

    def test_unknown_scheme(self):
        with pytest.raises(DescriptorInitializationError, match="Unknown WHIM scheme"):
            WHIMDescriptor(scheme="charge")

    def test_scheme_titles(self):
        assert [s.title for s in WhimScheme] == [
            "WHIM Unity Weights",
            "WHIM Atomic Masses",
            "WHIM Atomic Polarizabilities",
            "WHIM VdW Volumes",
            "WHIM Atomic Electronegativities",
        ]

    def test_weights(self):
        mol = _cloud(["C", "O", "H"], np.eye(3))
        np.testing.assert_allclose(WHIMDescriptor(scheme="unity").atom_weights(mol), [1, 1, 1])
        np.testing.assert_allclose(WHIMDescriptor(scheme="mass").atom_weights(mol),
                                   [1.000, 1.332, 0.084])

    def test_schemes_differ(self):
        mol = _cloud(["C", "O", "N", "C"],
                     [(0, 0, 0), (1.4, 0, 0), (0, 1.5, 0.3), (-0.5, -0.7, 1.1)])
        unity = WHIMDescriptor(scheme="unity").calculate(mol).to_array()
        mass = WHIMDescriptor(scheme="mass").calculate(mol).to_array()
        assert unity.shape == mass.shape == (17,)
        assert not np.allclose(unity, mass)

    def test_element_without_weight(self):
        mol = _cloud(["C", "Se"], [(0, 0, 0), (1.9, 0, 0)])
        with pytest.raises(CalculationError, match="Se"):
            WHIMDescriptor(scheme="polar").calculate(mol)
        # unity weights need no table
        assert WHIMDescriptor().calculate(mol).to_array().shape == (17,)

    def test_missing_coordinates(self, acetic_acid):
        with pytest.raises(InvalidStructureError):
            WHIMDescriptor().calculate(acetic_acid)

    def test_empty_molecule(self):
        with pytest.raises(CalculationError, match="no atoms"):
            WHIMDescriptor().calculate(Molecule())

    @pytest.mark.rdkit
    def test_calculate_from_smiles(self):
        value = WHIMDescriptor(scheme="eneg").calculate("CC(=O)O")
        values = value.to_array()
        assert values.shape == (17,)
        assert np.all(np.isfinite(values))
        assert value.parameters == ["eneg"]

    @pytest.mark.rdkit
    def test_calculate_batch_with_warnings(self, caplog):
        descriptor = WHIMDescriptor(handle_errors='warn')
        with caplog.at_level("WARNING"):
            result = descriptor.calculate_batch(["CCO", "not_a_smiles", "c1ccccc1"])
        assert result.shape == (2, 17)
        assert "not_a_smiles" in caplog.text

    def test_repr(self):
        assert repr(WHIMDescriptor(scheme="volume")) == "WHIMDescriptor(scheme='volume', output_dim=17)"

"""Base descriptor class for all molecular descriptors."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Union, Optional, Any, Dict, Sequence

import numpy as np

from .exceptions import MolDescError, ConfigurationError
from .molecule import Molecule, MoleculeLike, as_molecule, DEFAULT_EMBED_SEED


HANDLE_ERRORS_OPTIONS = ('raise', 'skip', 'warn')


@dataclass(frozen=True)
class DescriptorSpecification:
    """Identifies the algorithm behind a descriptor."""
    reference: str
    implementation_title: str
    implementation_identifier: str = ""
    implementation_vendor: str = "MolDesc"


@dataclass
class DescriptorValue:
    """Result of one descriptor calculation."""
    specification: DescriptorSpecification
    parameter_names: List[str]
    parameters: List[Any]
    value: Union[int, float, np.ndarray]
    names: List[str] = field(default_factory=list)

    def to_array(self) -> np.ndarray:
        """Return the value as a flat float array."""
        return np.atleast_1d(np.asarray(self.value, dtype=np.float64))

    def to_dict(self) -> Dict[str, Any]:
        """Map descriptor names to scalar values."""
        return dict(zip(self.names, self.to_array().tolist()))


class BaseDescriptor(ABC):
    """Abstract base class for all molecular descriptors.

    Descriptor implementations inherit from this class, implement
    :meth:`_calculate` and :meth:`get_descriptor_names`, and keep no state
    between calls.
    """

    # Descriptors that need atom coordinates set this so SMILES input is embedded in 3D
    requires_3d: bool = False

    def __init__(self, handle_errors: str = 'raise', error_handling: Optional[str] = None,
                 random_seed: int = DEFAULT_EMBED_SEED, **kwargs):
        """
        Initialize the base descriptor.

        Args:
            handle_errors: How to handle failing molecules in batches. Options: 'raise', 'skip', 'warn'
            error_handling: Alias for handle_errors
            random_seed: Seed used when SMILES input has to be embedded in 3D
            **kwargs: Additional parameters specific to the descriptor
        """
        if error_handling is not None:
            handle_errors = error_handling
        if handle_errors not in HANDLE_ERRORS_OPTIONS:
            raise ConfigurationError(
                f"'handle_errors' must be one of: {', '.join(HANDLE_ERRORS_OPTIONS)}",
                'handle_errors'
            )

        self.handle_errors = handle_errors
        self.random_seed = random_seed
        self.config = kwargs
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def _calculate(self, molecule: Molecule) -> Union[int, float, np.ndarray]:
        """
        Calculate the raw descriptor value for a molecule.

        Args:
            molecule: Molecular graph

        Returns:
            Scalar or 1D array with one entry per descriptor name
        """
        pass

    @abstractmethod
    def get_descriptor_names(self) -> List[str]:
        """
        Get the names of the values this descriptor produces.

        Returns:
            List of descriptor names
        """
        pass

    @abstractmethod
    def get_specification(self) -> DescriptorSpecification:
        pass

    def get_parameter_names(self) -> List[str]:
        return []

    def get_parameters(self) -> List[Any]:
        return []

    def get_output_dim(self) -> int:
        return len(self.get_descriptor_names())

    def to_molecule(self, molecule: MoleculeLike) -> Molecule:
        return as_molecule(molecule, embed_3d=self.requires_3d, random_seed=self.random_seed)

    def calculate(self, molecule: MoleculeLike) -> DescriptorValue:
        """
        Calculate the descriptor for a single molecule.

        Args:
            molecule: Molecule, RDKit molecule or SMILES string

        Returns:
            DescriptorValue holding the result
        """
        mol = self.to_molecule(molecule)
        return DescriptorValue(
            specification=self.get_specification(),
            parameter_names=self.get_parameter_names(),
            parameters=self.get_parameters(),
            value=self._calculate(mol),
            names=self.get_descriptor_names(),
        )

    def calculate_batch(self, molecules: Sequence[MoleculeLike]) -> np.ndarray:
        """
        Calculate the descriptor for a batch of molecules.

        Args:
            molecules: Molecules, RDKit molecules or SMILES strings

        Returns:
            2D numpy array where each row holds the values of one molecule
        """
        results: List[np.ndarray] = []
        for molecule in molecules:
            try:
                results.append(self.calculate(molecule).to_array())
            except (MolDescError, TypeError) as e:
                if self.handle_errors == 'raise':
                    raise
                elif self.handle_errors == 'warn':
                    self.logger.warning(f"Failed to calculate {self.name} for {molecule!r}: {e}")
                # 'skip' case: just continue to next molecule

        if not results:
            return np.empty((0, self.get_output_dim()), dtype=np.float64)

        return np.vstack(results)

    @property
    def name(self) -> str:
        return self.__class__.__name__

    def get_config(self) -> Dict[str, Any]:
        """
        Get the configuration of the descriptor.

        Returns:
            Dictionary containing descriptor configuration
        """
        return {
            'descriptor_type': self.__class__.__name__,
            'handle_errors': self.handle_errors,
            'output_dim': self.get_output_dim(),
            **dict(zip(self.get_parameter_names(), self.get_parameters())),
            **self.config
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(output_dim={self.get_output_dim()})"

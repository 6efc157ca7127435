"""Descriptor registry and facade for looking up molecular descriptors by name."""

import importlib
import logging
from typing import Dict, Type, Any, List, Optional, Sequence

import numpy as np

from .base import BaseDescriptor, DescriptorValue
from .exceptions import (
    DescriptorNotFoundError,
    DescriptorInitializationError,
    DependencyError,
    MolDescError,
)
from .molecule import MoleculeLike


logger = logging.getLogger(__name__)


class DescriptorRegistry:
    """Registry for managing molecular descriptors."""

    def __init__(self) -> None:
        self._descriptors: Dict[str, Type[BaseDescriptor]] = {}
        self._descriptor_modules: Dict[str, str] = {}

    def register(self, name: str, descriptor_class: Optional[Type[BaseDescriptor]] = None,
                 module_path: Optional[str] = None) -> None:
        """
        Register a descriptor class.

        Args:
            name: Name to register the descriptor under
            descriptor_class: The descriptor class to register
            module_path: Optional module path for lazy loading
        """
        if descriptor_class is not None:
            self._descriptors[name] = descriptor_class
        if module_path:
            self._descriptor_modules[name] = module_path

    def get_descriptor(self, name: str, **kwargs) -> BaseDescriptor:
        """
        Get a descriptor instance by name.

        Args:
            name: Name of the descriptor
            **kwargs: Parameters to pass to the descriptor constructor

        Returns:
            Initialized descriptor instance

        Raises:
            DescriptorNotFoundError: If descriptor is not found
            DescriptorInitializationError: If descriptor fails to initialize
        """
        if self._descriptors.get(name) is None:
            if name in self._descriptor_modules:
                self._lazy_load_descriptor(name)
            if self._descriptors.get(name) is None:
                raise DescriptorNotFoundError(name, self.list_descriptors())

        descriptor_class = self._descriptors[name]

        try:
            return descriptor_class(**kwargs)
        except ImportError as e:
            raise DependencyError(str(e), name)
        except MolDescError:
            raise
        except Exception as e:
            raise DescriptorInitializationError(name, str(e))

    def _lazy_load_descriptor(self, name: str) -> None:
        module_path = self._descriptor_modules[name]
        logger.debug(f"Lazy loading descriptor '{name}' from {module_path}")
        try:
            # The module registers its descriptors when imported
            importlib.import_module(module_path)
        except ImportError as e:
            raise DependencyError(f"Failed to import {module_path}: {e}", name)

    def list_descriptors(self) -> List[str]:
        """
        List all registered descriptor names.

        Returns:
            Sorted list of descriptor names
        """
        return sorted(set(self._descriptors) | set(self._descriptor_modules))

    def is_registered(self, name: str) -> bool:
        return name in self._descriptors or name in self._descriptor_modules


# Global registry instance
_registry = DescriptorRegistry()


def register_descriptor(*names: str, module_path: Optional[str] = None) -> Any:
    """
    Decorator to register a descriptor class under one or more names.

    Args:
        *names: Names to register the descriptor under
        module_path: Optional module path for lazy loading

    Returns:
        Decorator function
    """
    def decorator(descriptor_class: Type[BaseDescriptor]) -> Type[BaseDescriptor]:
        for name in names:
            _registry.register(name, descriptor_class, module_path)
        return descriptor_class
    return decorator


def get_registry() -> DescriptorRegistry:
    return _registry


class MolDescriptor:
    """
    Main interface for creating molecular descriptors.

    This class looks a descriptor up by name and forwards calculations to it.
    """

    def __init__(self, descriptor_name: str, **kwargs) -> None:
        """
        Initialize a molecular descriptor.

        Args:
            descriptor_name: Name of the descriptor to use
            **kwargs: Parameters to pass to the descriptor
        """
        self.descriptor_name = descriptor_name
        self.descriptor = _registry.get_descriptor(descriptor_name, **kwargs)

    def calculate(self, molecule: MoleculeLike) -> DescriptorValue:
        return self.descriptor.calculate(molecule)

    def calculate_batch(self, molecules: Sequence[MoleculeLike]) -> np.ndarray:
        """
        Calculate the descriptor for a batch of molecules.

        Args:
            molecules: Molecules, RDKit molecules or SMILES strings

        Returns:
            2D array of descriptor values
        """
        return self.descriptor.calculate_batch(molecules)

    def get_descriptor_names(self) -> List[str]:
        return self.descriptor.get_descriptor_names()

    def get_output_dim(self) -> int:
        return self.descriptor.get_output_dim()

    @classmethod
    def from_config(cls, config_path: str) -> 'MolDescriptor':
        """
        Create descriptor from configuration file.

        Args:
            config_path: Path to configuration file

        Returns:
            Initialized MolDescriptor instance
        """
        from .config import Config
        config = Config.from_file(config_path)
        return cls(**config.to_dict())

    @classmethod
    def from_preset(cls, preset_name: str) -> 'MolDescriptor':
        """
        Create descriptor from preset configuration.

        Args:
            preset_name: Name of the preset

        Returns:
            Initialized MolDescriptor instance
        """
        from .config import Config
        config = Config.from_preset(preset_name)
        return cls(**config.to_dict())

    @staticmethod
    def list_descriptors() -> List[str]:
        return _registry.list_descriptors()

    def get_config(self) -> Dict[str, Any]:
        return self.descriptor.get_config()

    def __repr__(self) -> str:
        return f"MolDescriptor(descriptor='{self.descriptor_name}', output_dim={self.get_output_dim()})"


def _register_builtin_descriptors() -> None:
    """Register built-in descriptors with lazy loading."""
    _registry.register('hbond_acceptors', module_path='moldesc.descriptors.hbond_acceptors')
    _registry.register('nHBAcc', module_path='moldesc.descriptors.hbond_acceptors')
    _registry.register('whim', module_path='moldesc.descriptors.whim')


# Register built-in descriptors on module import
_register_builtin_descriptors()

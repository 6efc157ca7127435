"""Custom exceptions for MolDesc library."""

from typing import Optional, List, Any


class MolDescError(Exception):
    """Base exception class for MolDesc library."""
    pass


class DescriptorNotFoundError(MolDescError):
    """Raised when a requested descriptor is not found in the registry."""

    def __init__(self, descriptor_name: str,
                 available_descriptors: Optional[List[Any]] = None) -> None:
        self.descriptor_name = descriptor_name
        self.available_descriptors = available_descriptors or []

        if self.available_descriptors:
            message = (
                f"Descriptor '{descriptor_name}' not found. "
                f"Available descriptors: {', '.join(self.available_descriptors)}"
            )
        else:
            message = f"Descriptor '{descriptor_name}' not found."

        super().__init__(message)


class InvalidSMILESError(MolDescError):
    """Raised when an invalid SMILES string is provided."""

    def __init__(self, smiles: str, reason: Optional[str] = None) -> None:
        self.smiles = smiles
        self.reason = reason

        if reason:
            message = f"Invalid SMILES '{smiles}': {reason}"
        else:
            message = f"Invalid SMILES: '{smiles}'"

        super().__init__(message)


class InvalidStructureError(MolDescError):
    """Raised when a molecular graph breaks one of its structural invariants."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid molecular structure: {reason}")


class DescriptorInitializationError(MolDescError):
    """Raised when a descriptor fails to initialize properly."""

    def __init__(self, descriptor_name: str, reason: Optional[str] = None) -> None:
        self.descriptor_name = descriptor_name
        self.reason = reason

        if reason:
            message = f"Failed to initialize descriptor '{descriptor_name}': {reason}"
        else:
            message = f"Failed to initialize descriptor '{descriptor_name}'"

        super().__init__(message)


class DependencyError(MolDescError):
    """Raised when there are dependency-related issues."""

    def __init__(self, dependency: str, descriptor_name: Optional[str] = None) -> None:
        self.dependency = dependency
        self.descriptor_name = descriptor_name

        if descriptor_name:
            message = f"Dependency '{dependency}' not available for descriptor '{descriptor_name}'"
        else:
            message = f"Dependency '{dependency}' not available"

        super().__init__(message)


class ConfigurationError(MolDescError):
    """Raised when there's an error in descriptor configuration."""

    def __init__(self, message: str, config_key: Optional[str] = None) -> None:
        self.config_key = config_key

        if config_key:
            full_message = f"Configuration error for '{config_key}': {message}"
        else:
            full_message = f"Configuration error: {message}"

        super().__init__(full_message)


class InvalidSettingsError(MolDescError):
    """Raised when node settings are incomplete or do not match the input table."""
    pass


class CalculationError(MolDescError):
    """Raised when a descriptor cannot be computed for a molecule."""

    def __init__(self, descriptor_name: str, reason: Optional[str] = None) -> None:
        self.descriptor_name = descriptor_name
        self.reason = reason

        if reason:
            message = f"Failed to calculate {descriptor_name}: {reason}"
        else:
            message = f"Failed to calculate {descriptor_name}"

        super().__init__(message)

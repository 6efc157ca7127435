"""Table adapters that append descriptor columns to a molecule table.

A node resolves the molecule column of a ``pandas.DataFrame``, computes its
descriptor for every row and returns a copy of the table with the result
columns appended. Settings are plain dictionaries; persisting them is left to
the caller.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import pandas as pd
from rdkit import Chem, rdBase

from moldesc.core.base import HANDLE_ERRORS_OPTIONS
from moldesc.core.exceptions import InvalidSettingsError, MolDescError
from moldesc.core.molecule import (
    DEFAULT_EMBED_SEED,
    Molecule,
    as_molecule,
    is_molecule_like,
)


@dataclass(frozen=True)
class ColumnSpec:
    """Name and pandas dtype of an appended column."""
    name: str
    dtype: str


class NodeSettings:
    """Settings shared by all descriptor nodes."""

    MOL_COLUMN_KEY = "molColumn"
    HANDLE_ERRORS_KEY = "handleErrors"
    RANDOM_SEED_KEY = "randomSeed"

    def __init__(self, mol_column_name: Optional[str] = None, handle_errors: str = 'warn',
                 random_seed: int = DEFAULT_EMBED_SEED) -> None:
        self.mol_column_name = mol_column_name
        self.handle_errors = handle_errors
        self.random_seed = random_seed

    def save_settings(self, settings: Dict[str, Any]) -> None:
        settings[self.MOL_COLUMN_KEY] = self.mol_column_name
        settings[self.HANDLE_ERRORS_KEY] = self.handle_errors
        settings[self.RANDOM_SEED_KEY] = self.random_seed

    def load_settings(self, settings: Dict[str, Any]) -> None:
        """
        Load settings from a dictionary.

        Raises:
            InvalidSettingsError: If a value has the wrong type or is out of range
        """
        mol_column_name = settings.get(self.MOL_COLUMN_KEY)
        if mol_column_name is not None and not isinstance(mol_column_name, str):
            raise InvalidSettingsError(f"'{self.MOL_COLUMN_KEY}' must be a string")

        handle_errors = settings.get(self.HANDLE_ERRORS_KEY, 'warn')
        if handle_errors not in HANDLE_ERRORS_OPTIONS:
            raise InvalidSettingsError(
                f"'{self.HANDLE_ERRORS_KEY}' must be one of: {', '.join(HANDLE_ERRORS_OPTIONS)}")

        random_seed = settings.get(self.RANDOM_SEED_KEY, DEFAULT_EMBED_SEED)
        if not isinstance(random_seed, int) or isinstance(random_seed, bool):
            raise InvalidSettingsError(f"'{self.RANDOM_SEED_KEY}' must be an integer")

        self.mol_column_name = mol_column_name
        self.handle_errors = handle_errors
        self.random_seed = random_seed

    def to_dict(self) -> Dict[str, Any]:
        settings: Dict[str, Any] = {}
        self.save_settings(settings)
        return settings

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.to_dict()})"


def is_molecule_column(column: pd.Series) -> bool:
    """
    Check whether a column holds molecules.

    The first non-missing value decides: Molecule and RDKit objects always
    qualify, strings qualify when they parse as SMILES.
    """
    values = column.dropna()
    if values.empty:
        return False

    value = values.iloc[0]
    if not is_molecule_like(value):
        return False
    if isinstance(value, str):
        block = rdBase.BlockLogs()
        try:
            return Chem.MolFromSmiles(value) is not None
        finally:
            del block
    return True


def unique_column_name(name: str, existing: List[str]) -> str:
    """Append a ' (#n)' suffix until the name does not clash with existing columns."""
    if name not in existing:
        return name
    counter = 1
    while f"{name} (#{counter})" in existing:
        counter += 1
    return f"{name} (#{counter})"


def _is_missing(value: Any) -> bool:
    return pd.api.types.is_scalar(value) and pd.isna(value)


class NodeModel(ABC):
    """Base class for descriptor nodes with one molecule input column."""

    settings_class = NodeSettings

    # Embed SMILES input in 3D before calculating
    requires_3d = False

    def __init__(self, settings: Optional[NodeSettings] = None) -> None:
        self.settings = settings if settings is not None else self.settings_class()
        self.mol_column: Optional[str] = None
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def create_output_column_specs(self) -> List[ColumnSpec]:
        """Column specifications of the appended columns, in order."""
        pass

    @abstractmethod
    def compute_cells(self, molecule: Molecule) -> List[Any]:
        """Compute one cell per output column for a molecule."""
        pass

    def configure(self, table: pd.DataFrame) -> List[ColumnSpec]:
        """
        Resolve the molecule column and describe the output columns.

        Args:
            table: Input table

        Returns:
            Specifications of the columns ``execute`` appends

        Raises:
            InvalidSettingsError: If no usable molecule column exists
        """
        column = self.settings.mol_column_name
        if column not in table.columns:
            column = None
            for name in table.columns:
                if is_molecule_column(table[name]):
                    column = name
            if column is None:
                raise InvalidSettingsError("Column does not exist")
            self.logger.warning(f"Column '{column}' automatically chosen as molecule column")

        if not is_molecule_column(table[column]):
            raise InvalidSettingsError("Column does not contain molecules")

        self.mol_column = column
        return self.create_output_column_specs()

    def execute(self, table: pd.DataFrame) -> pd.DataFrame:
        """
        Append the descriptor columns to a table.

        Args:
            table: Input table; it is not modified

        Returns:
            Copy of the input table with the result columns appended
        """
        specs = self.configure(table)
        rows = [self._compute_row(index, value)
                for index, value in table[self.mol_column].items()]

        result = table.copy()
        for position, spec in enumerate(specs):
            name = unique_column_name(spec.name, list(result.columns))
            result[name] = pd.Series([row[position] for row in rows],
                                     index=table.index, dtype=spec.dtype)
        return result

    def _compute_row(self, index: Any, value: Any) -> List[Any]:
        n_columns = len(self.create_output_column_specs())
        if _is_missing(value):
            return [None] * n_columns

        try:
            molecule = as_molecule(value, embed_3d=self.requires_3d,
                                   random_seed=self.settings.random_seed)
            return self.compute_cells(molecule)
        except (MolDescError, TypeError) as e:
            if self.settings.handle_errors == 'raise':
                raise
            if self.settings.handle_errors == 'warn':
                self.logger.warning(f"Row {index!r}: {e}")
            return [None] * n_columns

    def reset(self) -> None:
        self.mol_column = None

    def save_settings_to(self, settings: Dict[str, Any]) -> None:
        self.settings.save_settings(settings)

    def validate_settings(self, settings: Dict[str, Any]) -> None:
        """
        Check settings without applying them.

        Raises:
            InvalidSettingsError: If no molecule column is chosen or a value is invalid
        """
        candidate = self.settings_class()
        candidate.load_settings(settings)
        if not candidate.mol_column_name:
            raise InvalidSettingsError("No molecule column chosen")

    def load_validated_settings_from(self, settings: Dict[str, Any]) -> None:
        self.settings.load_settings(settings)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(settings={self.settings!r})"

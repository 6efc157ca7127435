"""Node appending WHIM descriptors to a molecule table.

Holistic descriptors described by Todeschini et al. One list column of 17
values is appended for every enabled atom weighting scheme.
"""

from typing import Any, Dict, List, Optional

from moldesc.core.exceptions import InvalidSettingsError
from moldesc.core.molecule import Molecule
from moldesc.descriptors.whim import WHIMDescriptor, WhimScheme
from .base import ColumnSpec, NodeModel, NodeSettings


class WhimSettings(NodeSettings):
    """Molecule column plus one switch per weighting scheme."""

    SCHEME_KEYS = {
        WhimScheme.UNITY_WEIGHTS: "schemeUnitWeights",
        WhimScheme.ATOMIC_MASSES: "schemeAtomicMasses",
        WhimScheme.ATOMIC_POLARIZABILITIES: "schemeAtomicPolariz",
        WhimScheme.VDW_VOLUMES: "schemeVdWVolumes",
        WhimScheme.ATOMIC_ELECTRONEGATIVITIES: "schemeAtomicElectronneg",
    }

    def __init__(self, mol_column_name: Optional[str] = None,
                 schemes: Optional[Dict[WhimScheme, bool]] = None, **kwargs) -> None:
        super().__init__(mol_column_name, **kwargs)
        self.schemes: Dict[WhimScheme, bool] = {scheme: True for scheme in WhimScheme}
        if schemes:
            self.schemes.update(schemes)

    def is_enabled(self, scheme: WhimScheme) -> bool:
        return self.schemes[scheme]

    def set_enabled(self, scheme: WhimScheme, enabled: bool) -> None:
        self.schemes[scheme] = bool(enabled)

    def enabled_schemes(self) -> List[WhimScheme]:
        return [scheme for scheme in WhimScheme if self.schemes[scheme]]

    def save_settings(self, settings: Dict[str, Any]) -> None:
        super().save_settings(settings)
        for scheme, key in self.SCHEME_KEYS.items():
            settings[key] = self.schemes[scheme]

    def load_settings(self, settings: Dict[str, Any]) -> None:
        schemes = {}
        for scheme, key in self.SCHEME_KEYS.items():
            value = settings.get(key, True)
            if not isinstance(value, bool):
                raise InvalidSettingsError(f"'{key}' must be a boolean")
            schemes[scheme] = value

        super().load_settings(settings)
        self.schemes = schemes


class WhimNode(NodeModel):
    """Appends one WHIM column per enabled weighting scheme."""

    settings_class = WhimSettings
    requires_3d = True

    def _descriptors(self) -> List[WHIMDescriptor]:
        return [WHIMDescriptor(scheme=scheme) for scheme in self.settings.enabled_schemes()]

    def create_output_column_specs(self) -> List[ColumnSpec]:
        return [ColumnSpec(scheme.title, "object") for scheme in self.settings.enabled_schemes()]

    def compute_cells(self, molecule: Molecule) -> List[Any]:
        return [descriptor.calculate(molecule).to_array().tolist()
                for descriptor in self._descriptors()]

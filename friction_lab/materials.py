"""
Material catalog for the friction experiment.

The catalog is read-only configuration data: it maps a material identifier
to its theoretical friction coefficient and display metadata. Wetness is
never baked into a profile; it is applied by the physics model.
"""

from typing import Dict, Iterator, List, Mapping

from pydantic import BaseModel, ConfigDict, Field

from .config_models import LabConfig, MaterialConfig, default_materials
from .interfaces import InvalidParameter


class MaterialProfile(BaseModel):
    """Immutable description of a surface material."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Material identifier")
    display_name: str = Field(..., description="Name shown in the results log")
    coefficient: float = Field(..., gt=0, description="Theoretical dry friction coefficient")
    color: str = Field(default="#94a3b8", description="Display color of the surface")
    texture_pattern: str = Field(default="", description="CSS-style texture of the surface")

    @classmethod
    def from_config(cls, material_id: str, material: MaterialConfig) -> "MaterialProfile":
        return cls(id=material_id, **material.model_dump())


class MaterialCatalog:
    """Lookup table of the materials available on the bench."""

    def __init__(self, profiles: Mapping[str, MaterialProfile]):
        if not profiles:
            raise InvalidParameter("Material catalog must contain at least one material")
        for material_id, profile in profiles.items():
            if profile.id != material_id:
                raise InvalidParameter(
                    f"Catalog key '{material_id}' does not match profile id '{profile.id}'"
                )
        self._profiles: Dict[str, MaterialProfile] = dict(profiles)

    @classmethod
    def from_config(cls, config: LabConfig) -> "MaterialCatalog":
        """Build the catalog from the configured materials."""
        return cls({
            material_id: MaterialProfile.from_config(material_id, material)
            for material_id, material in config.materials.items()
        })

    @classmethod
    def default(cls) -> "MaterialCatalog":
        """Catalog with the four materials shipped with the lab."""
        return cls({
            material_id: MaterialProfile.from_config(material_id, material)
            for material_id, material in default_materials().items()
        })

    def get(self, material_id: str) -> MaterialProfile:
        """
        Look up a material.

        Raises:
            InvalidParameter: If the material is not in the catalog
        """
        try:
            return self._profiles[material_id]
        except KeyError:
            raise InvalidParameter(
                f"Unknown material '{material_id}'. Available: {', '.join(self.ids())}"
            ) from None

    def ids(self) -> List[str]:
        return list(self._profiles)

    def __contains__(self, material_id: object) -> bool:
        return material_id in self._profiles

    def __iter__(self) -> Iterator[MaterialProfile]:
        return iter(self._profiles.values())

    def __len__(self) -> int:
        return len(self._profiles)


DEFAULT_MATERIALS = MaterialCatalog.default()

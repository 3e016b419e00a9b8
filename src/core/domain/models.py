"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- El mismo modelo sirve para leer la respuesta del backend y para serializar
  el body de cada request (alias `imageUrl` en el wire).

Nota:
- Estos modelos describen *qué* es un medicamento, no *cómo* se obtiene.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

NAME_MAX_LENGTH = 256
DESCRIPTION_MAX_LENGTH = 10_000


class _MedicationFields(BaseModel):
    """Campos comunes; sin límites de longitud (lo que el servidor guarde, se lee)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str = Field(..., description="Nombre visible del medicamento.")
    description: str = Field(default="", description="Descripción libre.")
    price: float = Field(
        default=0.0,
        ge=0.0,
        description="Precio; 0 significa 'sin precio' y no se muestra.",
    )
    image_url: str = Field(
        default="",
        alias="imageUrl",
        description="URL de la imagen; vacía usa el placeholder por defecto.",
    )

    @field_validator("image_url", mode="before")
    @classmethod
    def _none_image_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    def to_wire(self) -> dict[str, Any]:
        """Payload JSON con los nombres del backend (`imageUrl`)."""

        return self.model_dump(mode="json", by_alias=True)


class MedicationDraft(_MedicationFields):
    """Medicamento aún sin identificador (body de un POST).

    El servidor asigna el `id`; el cliente nunca inventa uno. Los límites de
    longitud aplican solo a lo que el usuario escribe.
    """

    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH, description="Nombre visible del medicamento.")
    description: str = Field(default="", max_length=DESCRIPTION_MAX_LENGTH, description="Descripción libre.")


class MedicationPatch(BaseModel):
    """Cambios parciales pedidos por el usuario (`None` = no tocar el campo)."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: Optional[str] = Field(default=None, min_length=1, max_length=NAME_MAX_LENGTH)
    description: Optional[str] = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    price: Optional[float] = Field(default=None, ge=0.0)
    image_url: Optional[str] = Field(default=None, alias="imageUrl")

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)

    def is_empty(self) -> bool:
        return not self.changes()


class Medication(_MedicationFields):
    """Medicamento sincronizado (existe en el servidor y en la colección local)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Identificador asignado por el servidor; inmutable.",
    )

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        # Algunos backends (json-server, Spring) devuelven ids numéricos.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    def draft(self) -> MedicationDraft:
        return MedicationDraft.model_validate(self.model_dump(exclude={"id"}))

    def apply(self, patch: MedicationPatch) -> "Medication":
        """Copia con los cambios del patch aplicados (el `id` no cambia)."""

        return self.model_copy(update=patch.changes())

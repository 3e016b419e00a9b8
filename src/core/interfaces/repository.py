"""Contrato del repositorio remoto de medicamentos.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- El store depende de esta abstracción; el cliente HTTP concreto (o un fake
  en tests) se inyecta desde fuera.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import Medication, MedicationDraft


@runtime_checkable
class MedicationRepository(Protocol):
    """Operaciones CRUD sobre la colección remota.

    Reglas de diseño:
    - Todas son asíncronas porque hacen I/O (HTTP).
    - Los fallos se expresan como `core.domain.errors.ApiError`.
    """

    async def list(self) -> list[Medication]:
        ...

    async def create(self, draft: MedicationDraft) -> Medication:
        """Crea el registro; el resultado es el registro canónico del servidor."""

        ...

    async def update(self, medication_id: str, medication: Medication) -> Medication:
        ...

    async def delete(self, medication_id: str) -> None:
        ...

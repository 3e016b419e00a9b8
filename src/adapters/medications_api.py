"""Cliente tipado del backend de medicamentos.

Responsabilidad:
- `JsonApi`: fetch genérico (JSON in/out) que recuerda si hay una llamada en
  curso y el último error, para que la capa de UI pueda reflejarlo.
- `MedicationsApi`: operaciones CRUD sobre `/medications` devolviendo modelos
  del dominio.

Todos los fallos salen como `core.domain.errors.ApiError`.
"""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from adapters.http_client import build_async_client, request
from core.config import AppSettings
from core.domain.errors import ApiError, DecodeError, HttpError
from core.domain.models import Medication, MedicationDraft

logger = logging.getLogger(__name__)

MEDICATIONS_PATH = "/medications"


class JsonApi:
    """Fetch JSON genérico con estado `is_loading` / `error`."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._owns_client = client is None
        self._client = client or build_async_client(self._settings, transport=transport)
        self._in_flight = 0
        self.error: ApiError | None = None

    @property
    def is_loading(self) -> bool:
        return self._in_flight > 0

    async def fetch(
        self,
        endpoint: str,
        *,
        method: str = "GET",
        headers: dict[str, str] | None = None,
        body: Any = None,
        decode: bool = True,
    ) -> Any:
        """Ejecuta la request y devuelve el JSON decodificado (`None` si no hay body).

        Con `decode=False` solo se valida el status; el body se ignora.
        """

        self._in_flight += 1
        self.error = None
        try:
            response = await request(
                self._client,
                endpoint,
                method=method,
                headers=headers,
                body=body,
                timeout=self._settings.request_timeout_seconds,
            )
            if not response.is_success:
                raise HttpError(response.status_code, str(response.request.url))
            if not decode or not response.content.strip():
                return None
            try:
                return response.json()
            except (json.JSONDecodeError, UnicodeDecodeError) as exc:
                raise DecodeError(f"{method} {endpoint}: invalid JSON body") from exc
        except ApiError as exc:
            self.error = exc
            raise
        finally:
            self._in_flight -= 1

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "JsonApi":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def _parse_medication(data: Any, *, context: str) -> Medication:
    if not isinstance(data, dict):
        raise DecodeError(f"{context}: expected a JSON object, got {type(data).__name__}")
    try:
        return Medication.model_validate(data)
    except ValidationError as exc:
        raise DecodeError(f"{context}: invalid medication record ({exc.error_count()} errors)") from exc


class MedicationsApi(JsonApi):
    """Implementa `core.interfaces.repository.MedicationRepository` sobre HTTP."""

    def _item_path(self, medication_id: str) -> str:
        return f"{MEDICATIONS_PATH}/{quote(medication_id, safe='')}"

    async def list(self) -> list[Medication]:
        data = await self.fetch(MEDICATIONS_PATH)
        if data is None:
            return []
        if not isinstance(data, list):
            error = DecodeError(f"GET {MEDICATIONS_PATH}: expected a JSON array")
            self.error = error
            raise error
        try:
            return [_parse_medication(item, context=f"GET {MEDICATIONS_PATH}") for item in data]
        except DecodeError as exc:
            self.error = exc
            raise

    async def create(self, draft: MedicationDraft) -> Medication:
        data = await self.fetch(MEDICATIONS_PATH, method="POST", body=draft.to_wire())
        try:
            created = _parse_medication(data, context=f"POST {MEDICATIONS_PATH}")
        except DecodeError as exc:
            self.error = exc
            raise
        logger.debug("created medication id=%s", created.id)
        return created

    async def update(self, medication_id: str, medication: Medication) -> Medication:
        path = self._item_path(medication_id)
        data = await self.fetch(path, method="PUT", body=medication.to_wire())
        if data is None:
            # 2xx sin body: el servidor aceptó el registro enviado.
            return medication
        try:
            return _parse_medication(data, context=f"PUT {path}")
        except DecodeError as exc:
            self.error = exc
            raise

    async def delete(self, medication_id: str) -> None:
        # DELETE no exige body: un 2xx con texto plano también es éxito.
        await self.fetch(self._item_path(medication_id), method="DELETE", decode=False)

"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y clasificación de errores de transporte.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.

Contrato de `request`:
- Devuelve la `httpx.Response` tal cual (un 4xx/5xx NO es error aquí).
- Falla con `ApiTimeout` si vence el deadline (la request se cancela de verdad)
  o con `NetworkError` si el transporte falla antes de obtener un status.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

import httpx

from core.config import REQUEST_TIMEOUT_SECONDS, AppSettings
from core.domain.errors import ApiTimeout, NetworkError

logger = logging.getLogger(__name__)

BASE_HEADERS: dict[str, str] = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


def build_async_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    Por qué un builder:
    - Centraliza base_url/headers para que todas las operaciones se comporten igual.
    - `transport` permite sustituir la red por un fake en tests.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = dict(BASE_HEADERS)
    if settings.origin:
        headers["Origin"] = settings.origin
    return httpx.AsyncClient(
        base_url=settings.base_url,
        timeout=httpx.Timeout(settings.request_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


async def request(
    client: httpx.AsyncClient,
    url: str,
    *,
    method: str = "GET",
    headers: dict[str, str] | None = None,
    body: Any = None,
    timeout: float = REQUEST_TIMEOUT_SECONDS,
) -> httpx.Response:
    """Ejecuta una request con deadline total `timeout` (segundos)."""

    merged = {"Content-Type": "application/json"}
    if headers:
        merged.update(headers)
    content = None if body is None else json.dumps(body).encode("utf-8")

    logger.debug("%s %s", method, url)
    try:
        # wait_for cancela la corutina al vencer: httpx aborta la conexión en curso.
        response = await asyncio.wait_for(
            client.request(method, url, headers=merged, content=content),
            timeout=timeout,
        )
    except asyncio.TimeoutError as exc:
        logger.warning("%s %s aborted after %ss", method, url, timeout)
        raise ApiTimeout(url, timeout) from exc
    except httpx.TimeoutException as exc:
        logger.warning("%s %s timed out in transport: %s", method, url, exc)
        raise ApiTimeout(url, timeout) from exc
    except httpx.TransportError as exc:
        logger.warning("%s %s failed: %s", method, url, exc)
        raise NetworkError(f"{method} {url} failed: {exc}") from exc

    logger.debug("%s %s -> %s", method, url, response.status_code)
    return response

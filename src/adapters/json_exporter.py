"""Exportación JSON de la colección.

Por qué JSON:
- Interoperabilidad: el archivo usa el mismo formato que el backend
  (`imageUrl`), así que puede reimportarse o inspeccionarse tal cual.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from core.domain.models import Medication


def export_medications_json(*, medications: Iterable[Medication], output_path: Path) -> Path:
    """Exporta los medicamentos a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = [m.to_wire() for m in medications]
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path

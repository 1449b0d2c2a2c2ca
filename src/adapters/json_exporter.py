"""Exportación JSON de resultados (pedido, factura, cliente).

Permite que la hoja de cálculo u otro pipeline lea el resultado sin
parsear la salida de la consola.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel


def export_result_json(*, result: BaseModel | dict[str, Any], output_path: Path) -> Path:
    """Exporta el resultado a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = result.model_dump(mode="json") if isinstance(result, BaseModel) else result
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path

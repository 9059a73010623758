"""Exportação do `ResolvedConfig` para YAML/JSON.

Notas:
- YAML é preferencial, JSON é alternativo.
- Na escrita em arquivo, o formato é inferido pela extensão.
- A ordem das entradas é preservada (é a ordem de aplicação).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Union

import yaml

from .errors import UnsupportedExportFormatError
from .model import ResolvedConfig

_SUFFIX_FORMATS = {".yaml": "yaml", ".yml": "yaml", ".json": "json"}


def dump_resolved_config(resolved: ResolvedConfig, fmt: str = "yaml") -> str:
    """Serializa a configuração resolvida.

    Args:
        resolved: configuração produzida pelo loader.
        fmt: `yaml` ou `json`.

    Raises:
        UnsupportedExportFormatError: se `fmt` não for suportado.
    """
    data = resolved.to_dict()
    fmt = fmt.lower()
    if fmt == "yaml":
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True, default_flow_style=False)
    if fmt == "json":
        return json.dumps(data, ensure_ascii=False, indent=2) + "\n"
    raise UnsupportedExportFormatError(f"unsupported export format: {fmt}")


def write_resolved_config(resolved: ResolvedConfig, path: Union[str, Path]) -> Path:
    """Escreve a configuração resolvida em `path` (YAML/JSON pela extensão)."""
    p = Path(path)
    fmt = _SUFFIX_FORMATS.get(p.suffix.lower())
    if fmt is None:
        raise UnsupportedExportFormatError(f"unsupported export format: {p.suffix}")
    p.write_text(dump_resolved_config(resolved, fmt), encoding="utf-8")
    return p

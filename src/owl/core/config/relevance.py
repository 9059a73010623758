# src/owl/core/config/relevance.py
"""
Descoberta dos arquivos `.owl` que afetam um host.

Retorna, em ordem estável:
    - `<OWL_ROOT>/main.owl`, se existir
    - `<OWL_ROOT>/hosts/<host>.owl`, se existir
    - todo grupo incluído por eles, recursivamente (cada grupo uma vez)

Usa apenas o tokenizador: arquivos que não passariam no parser ainda são
varridos com decodificação tolerante. Grupos ausentes ou com nome
inválido e caminhos que não são arquivos regulares são ignorados.

Serve a ferramentas de edição, que precisam abrir exatamente os arquivos
relevantes mesmo quando a configuração está quebrada.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Set, Union

from .paths import OwlLayout, current_hostname, is_valid_group_name
from .tokens import TokenKind, tokenize


def _included_groups(path: Path) -> List[str]:
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        # Arquivo ilegível continua relevante, mas não contribui grupos.
        return []
    tokens = tokenize(text, str(path))
    return [t.payload for t in tokens if t.kind is TokenKind.GROUP and is_valid_group_name(t.payload)]


def relevant_config_files(
    host_name: Optional[str] = None,
    *,
    owl_root: Optional[Union[str, Path]] = None,
) -> List[Path]:
    layout = OwlLayout.at(owl_root)
    host = host_name if host_name is not None else current_hostname()

    roots = [p for p in (layout.main_path, layout.host_path(host)) if p.is_file()]
    group_files: List[Path] = []
    visited: Set[str] = set()

    def collect(path: Path) -> None:
        for name in _included_groups(path):
            if name in visited:
                continue
            visited.add(name)
            group_path = layout.group_path(name)
            if group_path.is_file():
                group_files.append(group_path)
                collect(group_path)

    for root in roots:
        collect(root)

    return roots + group_files

# src/owl/core/config/diagnostics.py
"""
Diagnósticos canônicos da linguagem de configuração do Owl.

Toda falha de tokenização, parse, resolução ou carregamento é reportada
com o mesmo formato, apontando para o arquivo, a linha (1-based; 0 para
erros de arquivo inteiro) e o texto original da linha ofensora:

    <arquivo>:<linha>: <mensagem>
      -> <linha original sem espaços nas pontas>

Invariantes:
    - A renderização é determinística
    - A linha original nunca é reinterpretada, apenas aparada
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Diagnostic:
    """Localização e mensagem de uma falha de configuração."""

    source_file: str
    line_number: int
    raw_line: str
    message: str

    def render(self) -> str:
        return f"{self.source_file}:{self.line_number}: {self.message}\n  -> {self.raw_line.strip()}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source_file": self.source_file,
            "line_number": self.line_number,
            "raw_line": self.raw_line,
            "message": self.message,
        }

"""
Owl — Canonical Error Structures (v1)

Este módulo define o padrão canônico de payload de erro do Owl.
Erros de configuração são artefatos de domínio e fazem parte do contrato
com os colaboradores externos (planejamento de pacotes, sync de dotfiles,
serviços), devendo ser:

- explícitos
- serializáveis
- rastreáveis até arquivo e linha
- acionáveis

Nenhuma decisão implícita é permitida.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class OwlErrorPayload:
    """
    Payload canônico de erro do Owl.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
      (arquivo, linha, linha original)
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

CONFIG_STRUCTURAL_ERROR = "CONFIG_STRUCTURAL_ERROR"
CONFIG_CONTEXT_ERROR = "CONFIG_CONTEXT_ERROR"
CONFIG_REFERENCE_ERROR = "CONFIG_REFERENCE_ERROR"
CONFIG_CYCLE_ERROR = "CONFIG_CYCLE_ERROR"
CONFIG_UNKNOWN_DIRECTIVE = "CONFIG_UNKNOWN_DIRECTIVE"
CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"
CONFIG_READ_ERROR = "CONFIG_READ_ERROR"

DEFAULT_HINTS: Dict[str, str] = {
    CONFIG_STRUCTURAL_ERROR: "Corrija o formato da diretiva conforme a gramática do arquivo .owl.",
    CONFIG_CONTEXT_ERROR: "Declare '@package <nome>' antes de diretivas ':config', ':env', ':service' ou ':script'.",
    CONFIG_REFERENCE_ERROR: "Crie o arquivo do grupo em <OWL_ROOT>/groups/ ou remova a diretiva '@group'.",
    CONFIG_CYCLE_ERROR: "Remova a inclusão circular entre grupos; um grupo não pode se incluir direta ou indiretamente.",
    CONFIG_UNKNOWN_DIRECTIVE: "Use apenas diretivas conhecidas (@packages, @package, @group, @env, @script, :config, :env, :service, :script).",
    CONFIG_NOT_FOUND: "Crie <OWL_ROOT>/main.owl antes de aplicar a configuração.",
    CONFIG_READ_ERROR: "Verifique se o caminho é um arquivo regular legível.",
}


# ---------------------------------------------------------------------------
# Helper de fábrica
# ---------------------------------------------------------------------------

def config_error_payload(
    *,
    error_type: str,
    message: str,
    source_file: str,
    line_number: int,
    raw_line: str,
    extra: Optional[Dict[str, Any]] = None,
    hint: Optional[str] = None,
) -> OwlErrorPayload:
    details: Dict[str, Any] = {
        "source_file": source_file,
        "line_number": line_number,
        "raw_line": raw_line.strip(),
    }
    if extra:
        details.update(extra)
    return OwlErrorPayload(
        type=error_type,
        message=message,
        details=details,
        hint=hint if hint is not None else DEFAULT_HINTS.get(error_type),
    )

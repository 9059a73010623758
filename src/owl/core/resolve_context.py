# src/owl/core/resolve_context.py
"""
ResolveContext — registro estruturado de uma resolução de configuração.

Este módulo define o **ResolveContext**, a estrutura opcional passada ao
loader e ao resolver para registrar o que aconteceu durante uma chamada
de resolução.

O ResolveContext é o **único meio** de:
- registro de eventos estruturados (arquivo lido, grupo expandido,
  entrada mesclada, host ausente)
- coleta de warnings não fatais por arquivo (ex.: `!setup` depreciado,
  propriedade de serviço ignorada)

Princípios fundamentais:
- Isolamento por chamada (cada resolução possui seu próprio contexto)
- O contexto nunca influencia o `ResolvedConfig` produzido
- Erros fatais não passam por aqui: são exceções tipadas
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


@dataclass
class ResolveContext:
    """
    Contexto de observação de uma resolução.

    Campos canônicos:
    - host_name: host sendo resolvido (quando conhecido)
    - warnings: warnings por arquivo de origem
    - events: log estruturado de eventos
    """

    host_name: Optional[str] = None
    warnings: Dict[str, List[str]] = field(default_factory=dict)
    events: List[Dict[str, Any]] = field(default_factory=list)

    # -----------------------------
    # Logging & warnings
    # -----------------------------

    def log(self, *, level: str, message: str, **extra: Any) -> None:
        event = {
            "host_name": self.host_name,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, source_file: str, message: str) -> None:
        if source_file not in self.warnings:
            self.warnings[source_file] = []
        self.warnings[source_file].append(message)
        self.log(level="WARNING", message=message, source_file=source_file)

    def events_with(self, message: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e.get("message") == message]

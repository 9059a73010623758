# src/owl/core/config/model.py
"""
Modelo resolvido da configuração do Owl.

Este módulo define as estruturas em memória entregues aos colaboradores
externos (planejamento de pacotes, sync de dotfiles, serviços, variáveis
de ambiente e scripts de setup).

Invariantes:
    - No máximo uma `Entry` por nome de pacote em um resultado resolvido
    - Diretivas repetidas para o mesmo pacote acumulam na mesma `Entry`
    - `to_dict()` produz apenas tipos JSON/YAML nativos
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

SOURCE_MAIN = "main"
SOURCE_HOST = "host"
SOURCE_GROUP = "group"

SERVICE_SCOPES = ("system", "user")


@dataclass(frozen=True)
class ConfigMapping:
    source: str
    destination: str

    def to_dict(self) -> Dict[str, Any]:
        return {"source": self.source, "destination": self.destination}


@dataclass(frozen=True)
class EnvVar:
    key: str
    value: str

    def to_dict(self) -> Dict[str, Any]:
        return {"key": self.key, "value": self.value}


@dataclass(frozen=True)
class ServiceSpec:
    """
    Serviço gerenciado por um pacote.

    Padrões: escopo `system`, `enable` e `start` verdadeiros. `restart`,
    `reload` e `mask` ficam indefinidos (`None`) quando não declarados e
    são omitidos da forma serializada.
    """

    name: str
    scope: str = "system"
    enable: bool = True
    start: bool = True
    restart: Optional[bool] = None
    reload: Optional[bool] = None
    mask: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "name": self.name,
            "scope": self.scope,
            "enable": self.enable,
            "start": self.start,
        }
        for key in ("restart", "reload", "mask"):
            value = getattr(self, key)
            if value is not None:
                out[key] = value
        return out


@dataclass
class Entry:
    """Pacote resolvido e tudo o que foi declarado para ele."""

    package: str
    source_file: str
    source_kind: str
    group_name: Optional[str] = None
    configs: List[ConfigMapping] = field(default_factory=list)
    setups: List[str] = field(default_factory=list)
    services: List[ServiceSpec] = field(default_factory=list)
    envs: List[EnvVar] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "package": self.package,
            "configs": [c.to_dict() for c in self.configs],
            "setups": list(self.setups),
            "services": [s.to_dict() for s in self.services],
            "envs": [e.to_dict() for e in self.envs],
            "source_file": self.source_file,
            "source_kind": self.source_kind,
            "group_name": self.group_name,
        }


@dataclass
class ResolvedConfig:
    """Saída do loader: entradas por pacote, envs globais e scripts globais."""

    entries: List[Entry] = field(default_factory=list)
    global_envs: List[EnvVar] = field(default_factory=list)
    global_scripts: List[str] = field(default_factory=list)

    def get(self, package: str) -> Optional[Entry]:
        for entry in self.entries:
            if entry.package == package:
                return entry
        return None

    def package_names(self) -> List[str]:
        return [e.package for e in self.entries]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entries": [e.to_dict() for e in self.entries],
            "global_envs": [e.to_dict() for e in self.global_envs],
            "global_scripts": list(self.global_scripts),
        }

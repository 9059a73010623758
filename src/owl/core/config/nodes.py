# src/owl/core/config/nodes.py
"""
Nós da AST produzida pelo parser de arquivos `.owl`.

Todos os nós são imutáveis e carregam sua origem (`source_file`, `line`,
`raw`) para que o resolver possa reportar diagnósticos precisos.

Nós de escopo de pacote (`PackageConfigMapping`, `PackageEnvDecl`,
`PackageServiceDecl`, `PackageScriptDecl`) carregam também o `package`
que estava ativo no parser quando a diretiva foi lida.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Union

PropValue = Union[str, bool]


@dataclass(frozen=True)
class Node:
    line: int
    source_file: str
    raw: str


@dataclass(frozen=True)
class PackagesBlockStart(Node):
    pass


@dataclass(frozen=True)
class PackagesBlockItem(Node):
    name: str


@dataclass(frozen=True)
class PackageDecl(Node):
    name: str


@dataclass(frozen=True)
class GroupInclude(Node):
    name: str


@dataclass(frozen=True)
class GlobalEnvDecl(Node):
    key: str
    value: str


@dataclass(frozen=True)
class GlobalScriptDecl(Node):
    script: str


@dataclass(frozen=True)
class PackageConfigMapping(Node):
    package: str
    source: str
    dest: str


@dataclass(frozen=True)
class PackageEnvDecl(Node):
    package: str
    key: str
    value: str


@dataclass(frozen=True)
class PackageServiceDecl(Node):
    package: str
    name: str
    props: Dict[str, PropValue] = field(default_factory=dict)


@dataclass(frozen=True)
class PackageScriptDecl(Node):
    package: str
    script: str
    legacy: bool = False


@dataclass
class Program:
    source_file: str
    body: List[Node] = field(default_factory=list)

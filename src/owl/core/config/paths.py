# src/owl/core/config/paths.py
"""
Layout fixo de arquivos consumido pelo loader de configuração.

    <OWL_ROOT>/main.owl             obrigatório
    <OWL_ROOT>/hosts/<host>.owl     opcional
    <OWL_ROOT>/groups/<nome>.owl    obrigatório se referenciado via @group
    <OWL_ROOT>/dotfiles/            origem dos mapeamentos :config

O layout dentro da raiz não é configurável; apenas a raiz pode ser
informada explicitamente (testes, ferramentas de edição).
"""

from __future__ import annotations

import os
import re
import socket
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

OWL_ROOT_DIR = ".owl"
MAIN_FILE = "main.owl"
HOSTS_DIR = "hosts"
GROUPS_DIR = "groups"
DOTFILES_DIR = "dotfiles"
CONFIG_EXTENSION = ".owl"

# Segmentos separados por "/"; o caminho resultante nunca sai de `groups/`.
_GROUP_NAME_RE = re.compile(r"^[A-Za-z0-9_\-]+(?:/[A-Za-z0-9_\-]+)*$")


def default_owl_root() -> Path:
    """Retorna `$HOME/.owl`, usando `Path.home()` quando HOME não está definido."""
    home = os.environ.get("HOME")
    base = Path(home) if home else Path.home()
    return base / OWL_ROOT_DIR


def current_hostname() -> str:
    return socket.gethostname()


def is_valid_group_name(name: str) -> bool:
    """Indica se `name` resolve para um arquivo dentro de `<OWL_ROOT>/groups`."""
    return bool(_GROUP_NAME_RE.match(name))


@dataclass(frozen=True)
class OwlLayout:
    """Caminhos absolutos derivados de uma raiz Owl."""

    root: Path

    @classmethod
    def at(cls, owl_root: Optional[Union[str, Path]] = None) -> "OwlLayout":
        root = Path(owl_root).expanduser() if owl_root is not None else default_owl_root()
        return cls(root=Path(os.path.abspath(root)))

    @property
    def main_path(self) -> Path:
        return self.root / MAIN_FILE

    @property
    def dotfiles_dir(self) -> Path:
        return self.root / DOTFILES_DIR

    def host_path(self, host_name: str) -> Path:
        return self.root / HOSTS_DIR / f"{host_name}{CONFIG_EXTENSION}"

    def group_path(self, group_name: str) -> Path:
        return self.root / GROUPS_DIR / f"{group_name}{CONFIG_EXTENSION}"

    def dotfile_source(self, source: str) -> str:
        return os.path.normpath(str(self.dotfiles_dir / source))

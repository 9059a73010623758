# tests/conftest.py
"""
Fixtures compartilhados para testes do Owl.

Este módulo define fixtures reutilizáveis que fornecem:
- uma raiz Owl isolada em diretório temporário
- um helper para escrever arquivos `.owl` (main, hosts, groups)
- um ResolveContext limpo para inspeção de eventos

Decisões arquiteturais:
    - Cada teste recebe sua própria raiz em `tmp_path`
    - Nenhuma fixture lê `$HOME` real
    - Conteúdos `.owl` são passados como strings explícitas

Invariantes:
    - Nenhuma fixture executa resolução
    - Todas as fixtures são seguras para execução em paralelo

Este módulo existe como infraestrutura de teste e não
como validação funcional do core.
"""

from pathlib import Path

import pytest


@pytest.fixture
def owl_root(tmp_path: Path) -> Path:
    """
    Fixture que fornece uma raiz Owl vazia com o layout de diretórios canônico.

    Returns:
        Path: `<tmp>/.owl` com `hosts/`, `groups/` e `dotfiles/` criados.
    """
    root = tmp_path / ".owl"
    for sub in ("hosts", "groups", "dotfiles"):
        (root / sub).mkdir(parents=True)
    return root


@pytest.fixture
def write_owl(owl_root: Path):
    """
    Fixture factory que escreve um arquivo `.owl` relativo à raiz.

    Uso:
        write_owl("main.owl", "@package git\\n")
        write_owl("groups/base.owl", "...")

    Returns:
        Callable[[str, str], Path]: função que escreve e devolve o caminho.
    """

    def _write(relative: str, content: str) -> Path:
        path = owl_root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def resolve_ctx():
    """Fixture que fornece um ResolveContext determinístico para testes."""
    from owl.core.resolve_context import ResolveContext

    return ResolveContext(host_name="test-host")

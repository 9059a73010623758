# src/owl/__init__.py
"""
Owl — núcleo da linguagem de configuração declarativa de hosts.

Este pacote raiz define o namespace público do Owl, uma ferramenta de
configuração de hosts e gerenciamento de pacotes construída sobre uma
pequena linguagem declarativa (arquivos `.owl`).

Arquitetura em alto nível:
    - core.config          → tokenizador, parser, resolver de grupos e loader
    - core.errors          → payload canônico de erro
    - core.resolve_context → registro estruturado de eventos de resolução

Limites explícitos:
    - Não instala pacotes nem executa subprocessos
    - Não sincroniza dotfiles nem controla serviços
    - Não acessa rede nem persiste estado

Os colaboradores externos consomem apenas o `ResolvedConfig` produzido
por `load_config_for_host`.
"""
# src/owl/__init__.py
from .core.config import ResolvedConfig, load_config_for_host

__all__ = ["ResolvedConfig", "load_config_for_host"]

# src/owl/core/config/hashing.py
"""
Hashing canônico da configuração resolvida do Owl.

Este módulo implementa a geração de hash determinístico do
`ResolvedConfig` entregue aos colaboradores externos.

O hash gerado representa a **identidade estrutural** da configuração e é
utilizado para:
    - detectar se a configuração mudou entre duas aplicações
    - verificar idempotência da resolução
    - associar uma aplicação à configuração que a originou

Política de hashing (v1):
    - Serialização JSON canônica de `ResolvedConfig.to_dict()`
    - Ordenação estável de chaves
    - Separadores compactos
    - Codificação UTF-8
    - SHA-256

Invariantes:
    - Configurações estruturalmente equivalentes produzem o mesmo hash
    - O valor gerado é sempre uma string hexadecimal de 64 caracteres
    - A ordem das entradas faz parte da identidade (é a ordem de aplicação)

Limites explícitos:
    - Não persiste o hash
    - Não inclui eventos ou warnings do `ResolveContext`
"""

import hashlib
import json
from typing import Any, Dict, Union

from .model import ResolvedConfig


def compute_config_hash(config: Union[ResolvedConfig, Dict[str, Any]]) -> str:
    """
    Gera um hash determinístico da configuração resolvida.

    Args:
        config (ResolvedConfig | Dict[str, Any]): Configuração resolvida ou
            sua forma serializada.

    Returns:
        str: Hash SHA-256 hexadecimal da configuração.

    Raises:
        TypeError: Se o objeto fornecido não for `ResolvedConfig` nem dict.
    """
    if isinstance(config, ResolvedConfig):
        config = config.to_dict()

    if not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser ResolvedConfig ou dict, recebido: {type(config).__name__}"
        )

    canonical_json = json.dumps(
        config,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )

    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()

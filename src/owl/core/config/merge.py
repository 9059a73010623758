# src/owl/core/config/merge.py
"""
Política canônica de merge de entradas de pacote.

Este módulo implementa a política oficial usada pelo Owl sempre que duas
fontes declaram o mesmo pacote: entradas vindas de grupos dentro de um
arquivo e entradas do arquivo de host sobre o arquivo global.

Política de merge (v1) — "último não vazio vence":
    - list (configs, setups, services, envs) → substituição total pela
      lista recebida **somente se** ela não estiver vazia; caso contrário
      a lista existente é mantida
    - identidade (source_file, source_kind, group_name) → sempre a da
      entrada processada por último
    - nunca há união de listas: duas fontes com mapeamentos diferentes e
      não vazios para o mesmo pacote não são concatenadas

Princípios fundamentais:
    - O merge é determinístico e puramente funcional
    - Nenhum input é mutado durante o processo
    - A ordem de chegada define a precedência

Invariantes:
    - A mesma entrada sempre produz a mesma saída
    - O resultado contém no máximo uma entrada por pacote
    - Pacotes presentes apenas na base são preservados na mesma posição

Limites explícitos:
    - Não carrega arquivos
    - Não resolve grupos
    - Não valida semântica de pacotes

Este módulo existe para garantir previsibilidade
e precedência explícita na resolução de configuração.
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional

from owl.core.resolve_context import ResolveContext

from .model import Entry


def merge_entry(existing: Entry, incoming: Entry) -> Entry:
    """
    Mescla duas entradas do mesmo pacote com a política "último não vazio vence".

    Args:
        existing (Entry): Entrada já conhecida (processada antes).
        incoming (Entry): Entrada processada por último.

    Returns:
        Entry: Nova entrada resultante; nenhum dos inputs é mutado.

    Raises:
        ValueError: Se as entradas forem de pacotes diferentes.
    """
    if existing.package != incoming.package:
        raise ValueError(
            f"Cannot merge entries of different packages: '{existing.package}' vs '{incoming.package}'"
        )

    return Entry(
        package=incoming.package,
        source_file=incoming.source_file,
        source_kind=incoming.source_kind,
        group_name=incoming.group_name,
        configs=list(incoming.configs or existing.configs),
        setups=list(incoming.setups or existing.setups),
        services=list(incoming.services or existing.services),
        envs=list(incoming.envs or existing.envs),
    )


def merge_entries_into(
    target: Dict[str, Entry],
    incoming: Iterable[Entry],
    *,
    context: Optional[ResolveContext] = None,
) -> Dict[str, Entry]:
    """
    Aplica `incoming` sobre o mapa `target` (pacote → entrada), em ordem.

    O mapa `target` é atualizado in-place e também retornado. Pacotes novos
    são anexados ao final; pacotes existentes mantêm sua posição.
    """
    for entry in incoming:
        existing = target.get(entry.package)
        if existing is None:
            target[entry.package] = entry
            continue
        target[entry.package] = merge_entry(existing, entry)
        if context is not None:
            context.log(
                level="DEBUG",
                message="entry merged",
                package=entry.package,
                overridden_by=entry.source_file,
            )
    return target

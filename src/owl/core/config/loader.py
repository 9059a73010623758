# src/owl/core/config/loader.py
"""
Loader canônico de configuração do Owl.

Este módulo é responsável por carregar, validar e resolver a configuração
efetiva de um host a partir dos arquivos `.owl`.

A configuração é resolvida a partir de:
    - `<OWL_ROOT>/main.owl` (obrigatório)
    - `<OWL_ROOT>/hosts/<host>.owl` (opcional)
    - `<OWL_ROOT>/groups/<nome>.owl` incluídos por `@group`

Responsabilidades do módulo:
    - Exigir a existência do arquivo global
    - Resolver arquivo global e arquivo de host, cada um com seu próprio
      conjunto de grupos em expansão
    - Mesclar entradas do host sobre as globais ("último não vazio vence")
    - Concatenar envs e scripts globais (global antes de host)

Princípios fundamentais:
    - Configuração é declarativa e explícita
    - Erros são falhas fatais: nenhuma configuração parcial é retornada
    - A mesma entrada sempre produz a mesma configuração final

Invariantes:
    - O arquivo global é obrigatório; a ausência do host não é erro
    - Ciclos de grupo do host são independentes dos do global
    - Nenhum estado é compartilhado entre chamadas de `resolve()`

Limites explícitos:
    - Não executa subprocessos nem acessa rede
    - Não persiste estado
    - Não sincroniza dotfiles nem gerencia serviços

Este módulo existe para garantir resolução previsível,
determinística e segura da configuração.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Set, Union

from owl.core.resolve_context import ResolveContext

from .errors import GlobalConfigNotFoundError
from .merge import merge_entries_into
from .model import SOURCE_HOST, SOURCE_MAIN, Entry, ResolvedConfig
from .paths import OwlLayout, current_hostname
from .resolver import FileResolution, parse_file, resolve_program


class ConfigLoader:
    """
    Orquestra a resolução global + host sobre um layout Owl.

    Uso:
        resolved = ConfigLoader(owl_root="~/.owl").resolve("workstation")
    """

    def __init__(
        self,
        owl_root: Optional[Union[str, Path]] = None,
        *,
        context: Optional[ResolveContext] = None,
    ):
        self.layout = OwlLayout.at(owl_root)
        self.context = context

    def _resolve_file(self, path: Path, *, source_kind: str) -> FileResolution:
        # Cada arquivo de topo recebe um conjunto novo de grupos em expansão.
        in_progress: Set[str] = set()
        program = parse_file(path)
        if self.context is not None:
            self.context.log(level="INFO", message="file loaded", source_file=str(path), source_kind=source_kind)
        return resolve_program(
            program,
            layout=self.layout,
            source_kind=source_kind,
            in_progress=in_progress,
            context=self.context,
        )

    def resolve(self, host_name: str) -> ResolvedConfig:
        """
        Resolve a configuração efetiva de um host.

        Política de resolução:
            - `main.owl` é obrigatório
            - `hosts/<host_name>.owl` é opcional
            - Entradas do host sobrescrevem listas não vazias das globais
            - Envs e scripts globais são concatenados (global, depois host)

        Args:
            host_name (str): Nome do host cujo override deve ser aplicado.

        Returns:
            ResolvedConfig: Configuração final resolvida.

        Raises:
            GlobalConfigNotFoundError: Se `main.owl` não existir.
            ConfigReadError: Se um arquivo `.owl` existir mas não puder ser lido.
            OwlConfigError: Qualquer erro de parse ou resolução.
        """
        main_path = self.layout.main_path
        if not main_path.exists():
            raise GlobalConfigNotFoundError(
                str(main_path), 0, "", f"Global config file not found: {main_path}"
            )

        global_result = self._resolve_file(main_path, source_kind=SOURCE_MAIN)

        host_path = self.layout.host_path(host_name)
        host_result = FileResolution()
        if host_path.exists():
            host_result = self._resolve_file(host_path, source_kind=SOURCE_HOST)
        elif self.context is not None:
            self.context.log(level="INFO", message="host file absent", source_file=str(host_path))

        merged: Dict[str, Entry] = dict(global_result.entries)
        merge_entries_into(merged, host_result.entries.values(), context=self.context)

        return ResolvedConfig(
            entries=list(merged.values()),
            global_envs=[*global_result.global_envs, *host_result.global_envs],
            global_scripts=[*global_result.global_scripts, *host_result.global_scripts],
        )


def load_config_for_host(
    host_name: Optional[str] = None,
    *,
    owl_root: Optional[Union[str, Path]] = None,
    context: Optional[ResolveContext] = None,
) -> ResolvedConfig:
    """
    Carrega e resolve a configuração efetiva de um host.

    Args:
        host_name (Optional[str]): Host a resolver; padrão é o hostname atual.
        owl_root (Optional[str | Path]): Raiz Owl; padrão é `$HOME/.owl`.
        context (Optional[ResolveContext]): Registro de eventos opcional.

    Returns:
        ResolvedConfig: Configuração final resolvida.
    """
    host = host_name if host_name is not None else current_hostname()
    if context is not None and context.host_name is None:
        context.host_name = host
    return ConfigLoader(owl_root, context=context).resolve(host)

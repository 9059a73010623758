# src/owl/core/config/resolver.py
"""
Resolver canônico de um arquivo `.owl` (AST → entradas).

Este módulo percorre a AST de um arquivo, expande recursivamente as
inclusões de grupo e acumula as entradas por pacote, junto com as
variáveis de ambiente e scripts globais do arquivo.

Política de expansão de grupos:
    - `@group <nome>` localiza `<OWL_ROOT>/groups/<nome>.owl`
    - Um grupo já em expansão (conjunto `in_progress` compartilhado por
      referência entre chamadas irmãs) indica ciclo → `CycleError`
    - Arquivo de grupo inexistente → `GroupReferenceError`
    - O grupo é marcado em expansão, resolvido com o **mesmo** conjunto e
      desmarcado ao terminar; inclusões em diamante não são ciclo
    - As entradas do grupo entram no mapa do arquivo atual via
      `merge_entries_into` (último não vazio vence)
    - Envs e scripts globais do grupo são anexados na posição da inclusão

Decisões arquiteturais:
    - Resolução síncrona e em ordem estrita de arquivo
    - O pacote atual já vem anotado em cada nó pelo parser
    - Validação de propriedades de serviço ocorre aqui, com diagnóstico
      apontando para a linha da diretiva

Invariantes:
    - No máximo uma entrada por pacote no resultado de um arquivo
    - A primeira falha interrompe a resolução (sem resultado parcial)

Limites explícitos:
    - Não mescla host sobre global (responsabilidade do loader)
    - Não executa scripts nem toca dotfiles
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Set

from owl.core.resolve_context import ResolveContext

from .errors import ConfigReadError, CycleError, GroupReferenceError, StructuralError
from .merge import merge_entries_into
from .model import SERVICE_SCOPES, SOURCE_GROUP, ConfigMapping, Entry, EnvVar, ServiceSpec
from .nodes import (
    GlobalEnvDecl,
    GlobalScriptDecl,
    GroupInclude,
    PackageConfigMapping,
    PackageDecl,
    PackageEnvDecl,
    PackageScriptDecl,
    PackageServiceDecl,
    PackagesBlockItem,
    PackagesBlockStart,
    Program,
)
from .parser import parse_tokens
from .paths import OwlLayout
from .tokens import tokenize

_SERVICE_BOOL_PROPS = ("enable", "start", "restart", "reload", "mask")


@dataclass
class FileResolution:
    """Resultado da resolução de um único arquivo (com seus grupos)."""

    entries: Dict[str, Entry] = field(default_factory=dict)
    global_envs: List[EnvVar] = field(default_factory=list)
    global_scripts: List[str] = field(default_factory=list)


def parse_file(path: Path) -> Program:
    """
    Lê, tokeniza e faz o parse de um arquivo `.owl`.

    Bytes fora de UTF-8 viram U+FFFD; apenas falhas de E/S interrompem.

    Raises:
        ConfigReadError: Se o caminho não puder ser lido como arquivo.
        OwlConfigError: Qualquer erro de parse do conteúdo.
    """
    source_file = str(path)
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise ConfigReadError(
            source_file, 0, "", f"Cannot read config file: {source_file} ({e.strerror or e})"
        ) from e
    return parse_tokens(tokenize(text, source_file))


def build_service(node: PackageServiceDecl) -> ServiceSpec:
    """
    Constrói um `ServiceSpec` a partir das propriedades de `:service`.

    Raises:
        StructuralError: Se `scope` não for `system`/`user` ou se uma
            propriedade booleana receber valor não booleano.
    """
    props = node.props
    scope = props.get("scope", "system")
    if scope not in SERVICE_SCOPES:
        raise StructuralError(
            node.source_file,
            node.line,
            node.raw,
            f'Invalid service scope "{scope}": expected "system" or "user"',
        )

    flags: Dict[str, Optional[bool]] = {}
    for key in _SERVICE_BOOL_PROPS:
        if key not in props:
            continue
        value = props[key]
        if not isinstance(value, bool):
            raise StructuralError(
                node.source_file,
                node.line,
                node.raw,
                f'Service property "{key}" must be true or false, got "{value}"',
            )
        flags[key] = value

    return ServiceSpec(
        name=node.name,
        scope=str(scope),
        enable=flags.get("enable", True),
        start=flags.get("start", True),
        restart=flags.get("restart"),
        reload=flags.get("reload"),
        mask=flags.get("mask"),
    )


class FileResolver:
    """Resolve a AST de um arquivo dentro de um layout Owl."""

    def __init__(
        self,
        *,
        layout: OwlLayout,
        source_kind: str,
        in_progress: Set[str],
        group_name: Optional[str] = None,
        context: Optional[ResolveContext] = None,
    ):
        self.layout = layout
        self.source_kind = source_kind
        self.group_name = group_name
        self.in_progress = in_progress
        self.context = context
        self._source_file = ""

    def resolve(self, program: Program) -> FileResolution:
        result = FileResolution()
        self._source_file = program.source_file
        for node in program.body:
            self._visit(node, result)
        return result

    def _entry(self, result: FileResolution, name: str) -> Entry:
        entry = result.entries.get(name)
        if entry is None:
            entry = Entry(
                package=name,
                source_file=self._source_file,
                source_kind=self.source_kind,
                group_name=self.group_name,
            )
            result.entries[name] = entry
        return entry

    def _visit(self, node, result: FileResolution) -> None:
        if isinstance(node, PackagesBlockStart):
            pass
        elif isinstance(node, (PackagesBlockItem, PackageDecl)):
            self._entry(result, node.name)
        elif isinstance(node, GroupInclude):
            self._include_group(node, result)
        elif isinstance(node, GlobalEnvDecl):
            result.global_envs.append(EnvVar(key=node.key, value=node.value))
        elif isinstance(node, GlobalScriptDecl):
            result.global_scripts.append(node.script)
        elif isinstance(node, PackageConfigMapping):
            self._entry(result, node.package).configs.append(
                ConfigMapping(source=self.layout.dotfile_source(node.source), destination=node.dest)
            )
        elif isinstance(node, PackageEnvDecl):
            self._entry(result, node.package).envs.append(EnvVar(key=node.key, value=node.value))
        elif isinstance(node, PackageServiceDecl):
            self._warn_unknown_service_props(node)
            self._entry(result, node.package).services.append(build_service(node))
        elif isinstance(node, PackageScriptDecl):
            if node.legacy and self.context is not None:
                self.context.add_warning(
                    source_file=node.source_file,
                    message=f"line {node.line}: '!setup' is deprecated, use ':script' instead",
                )
            self._entry(result, node.package).setups.append(node.script)
        else:
            raise TypeError(f"Unsupported AST node: {type(node).__name__}")

    def _warn_unknown_service_props(self, node: PackageServiceDecl) -> None:
        if self.context is None:
            return
        known = set(_SERVICE_BOOL_PROPS) | {"scope"}
        for key in node.props:
            if key not in known:
                self.context.add_warning(
                    source_file=node.source_file,
                    message=f"line {node.line}: unknown service property '{key}' ignored",
                )

    def _include_group(self, node: GroupInclude, result: FileResolution) -> None:
        name = node.name
        if name in self.in_progress:
            raise CycleError(
                node.source_file,
                node.line,
                node.raw,
                f'Circular dependency detected for group "{name}"',
                group=name,
            )

        group_path = self.layout.group_path(name)
        if not group_path.exists():
            raise GroupReferenceError(
                node.source_file,
                node.line,
                node.raw,
                f"Group file not found: {group_path}",
                group_path=str(group_path),
            )

        self.in_progress.add(name)
        try:
            if self.context is not None:
                self.context.log(level="DEBUG", message="group entered", group=name, source_file=str(group_path))
            group_result = resolve_program(
                parse_file(group_path),
                layout=self.layout,
                source_kind=SOURCE_GROUP,
                group_name=name,
                in_progress=self.in_progress,
                context=self.context,
            )
        finally:
            self.in_progress.discard(name)

        merge_entries_into(result.entries, group_result.entries.values(), context=self.context)
        result.global_envs.extend(group_result.global_envs)
        result.global_scripts.extend(group_result.global_scripts)
        if self.context is not None:
            self.context.log(level="DEBUG", message="group left", group=name, entries=len(group_result.entries))


def resolve_program(
    program: Program,
    *,
    layout: OwlLayout,
    source_kind: str,
    in_progress: Set[str],
    group_name: Optional[str] = None,
    context: Optional[ResolveContext] = None,
) -> FileResolution:
    """
    Resolve a AST de um arquivo, expandindo grupos recursivamente.

    Args:
        program (Program): AST do arquivo.
        layout (OwlLayout): Raiz Owl usada para localizar grupos e dotfiles.
        source_kind (str): `main`, `host` ou `group`.
        in_progress (Set[str]): Grupos em expansão; compartilhado por
            referência com as chamadas recursivas.
        group_name (Optional[str]): Nome do grupo quando `source_kind == "group"`.
        context (Optional[ResolveContext]): Registro de eventos opcional.

    Returns:
        FileResolution: Entradas, envs globais e scripts globais do arquivo.

    Raises:
        CycleError: Se um grupo incluir a si mesmo direta ou indiretamente.
        GroupReferenceError: Se um grupo referenciado não existir.
        StructuralError: Se uma propriedade de serviço for inválida.
        OwlConfigError: Qualquer erro de parse de um arquivo de grupo.
    """
    resolver = FileResolver(
        layout=layout,
        source_kind=source_kind,
        group_name=group_name,
        in_progress=in_progress,
        context=context,
    )
    return resolver.resolve(program)

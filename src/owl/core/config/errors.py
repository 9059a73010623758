# src/owl/core/config/errors.py
"""
Exceções canônicas da camada de configuração do Owl.

Este módulo define a hierarquia oficial de exceções utilizadas durante
a tokenização, o parse, a resolução de grupos e o carregamento dos
arquivos `.owl`.

As exceções aqui definidas representam **violações explícitas da
configuração**, e não erros genéricos de execução.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Toda falha é fatal: não há recuperação dentro do core
    - Mensagens apontam arquivo, linha e texto original

Responsabilidades do módulo:
    - Expressar falhas estruturais, de contexto, de referência e de ciclo
    - Carregar o `Diagnostic` canônico de cada falha
    - Converter falhas para o payload serializável de `owl.core.errors`

Invariantes:
    - Todas as exceções de configuração herdam de `OwlConfigError`
    - `str(exc)` é sempre a renderização do diagnóstico

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não registra eventos (responsabilidade do `ResolveContext`)

Este módulo existe para garantir clareza,
consistência e previsibilidade no tratamento de erros de configuração.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from owl.core.errors import (
    CONFIG_CONTEXT_ERROR,
    CONFIG_CYCLE_ERROR,
    CONFIG_NOT_FOUND,
    CONFIG_READ_ERROR,
    CONFIG_REFERENCE_ERROR,
    CONFIG_STRUCTURAL_ERROR,
    CONFIG_UNKNOWN_DIRECTIVE,
    OwlErrorPayload,
    config_error_payload,
)

from .diagnostics import Diagnostic


class OwlConfigError(Exception):
    """
    Exceção base para erros da linguagem de configuração do Owl.

    Todas as exceções levantadas durante tokenização, parse, resolução
    e carregamento devem herdar desta classe.

    Esta hierarquia permite:
        - captura genérica de erros de configuração
        - distinção entre categorias de falha via subclasses
        - serialização estável via `to_payload()`

    Limites explícitos:
        - Não representa falha de subprocesso, rede ou sincronização
    """

    error_type: str = CONFIG_STRUCTURAL_ERROR

    def __init__(self, source_file: str, line_number: int, raw_line: str, message: str):
        self.diagnostic = Diagnostic(
            source_file=str(source_file),
            line_number=line_number,
            raw_line=raw_line or "",
            message=message,
        )
        super().__init__(self.diagnostic.render())

    @property
    def source_file(self) -> str:
        return self.diagnostic.source_file

    @property
    def line_number(self) -> int:
        return self.diagnostic.line_number

    @property
    def raw_line(self) -> str:
        return self.diagnostic.raw_line

    @property
    def message(self) -> str:
        return self.diagnostic.message

    def _payload_extra(self) -> Optional[Dict[str, Any]]:
        return None

    def to_payload(self) -> OwlErrorPayload:
        return config_error_payload(
            error_type=self.error_type,
            message=self.message,
            source_file=self.source_file,
            line_number=self.line_number,
            raw_line=self.raw_line,
            extra=self._payload_extra(),
        )


class StructuralError(OwlConfigError):
    """
    Diretiva com formato inválido.

    Exemplos: `:config` sem `->`, `@env` sem `=`, nome obrigatório vazio,
    propriedade de serviço malformada ou linha não reconhecida.
    """

    error_type = CONFIG_STRUCTURAL_ERROR


class ContextError(OwlConfigError):
    """Diretiva de pacote (`:config`, `:env`, `:service`, `:script`) sem `@package` ativo."""

    error_type = CONFIG_CONTEXT_ERROR


class GroupReferenceError(OwlConfigError):
    """
    Exceção levantada quando `@group <nome>` aponta para um arquivo
    inexistente em `<OWL_ROOT>/groups/<nome>.owl`.

    Decisões arquiteturais:
        - Grupos referenciados são obrigatórios
        - O caminho absoluto calculado faz parte da mensagem

    Limites explícitos:
        - Não tenta localizar o grupo em outros diretórios
    """

    error_type = CONFIG_REFERENCE_ERROR

    def __init__(self, source_file: str, line_number: int, raw_line: str, message: str, *, group_path: str):
        self.group_path = group_path
        super().__init__(source_file, line_number, raw_line, message)

    def _payload_extra(self) -> Optional[Dict[str, Any]]:
        return {"group_path": self.group_path}


class CycleError(OwlConfigError):
    """
    Exceção levantada quando a inclusão de grupos forma um ciclo.

    Apenas arestas de retorno reais contam como ciclo: um grupo que volta
    a ser incluído enquanto ainda está em expansão. Dois grupos irmãos que
    incluem um terceiro em comum não formam ciclo.

    Invariantes:
        - `group` nomeia o grupo que fecharia o ciclo
    """

    error_type = CONFIG_CYCLE_ERROR

    def __init__(self, source_file: str, line_number: int, raw_line: str, message: str, *, group: str):
        self.group = group
        super().__init__(source_file, line_number, raw_line, message)

    def _payload_extra(self) -> Optional[Dict[str, Any]]:
        return {"group": self.group}


class UnknownDirectiveError(OwlConfigError):
    """Linha iniciada por sigilo (`@`, `:`, `!`) que não corresponde a nenhuma diretiva."""

    error_type = CONFIG_UNKNOWN_DIRECTIVE


class GlobalConfigNotFoundError(OwlConfigError):
    """
    Exceção levantada quando `<OWL_ROOT>/main.owl` não existe.

    Decisões arquiteturais:
        - O arquivo global é obrigatório
        - Erro de arquivo inteiro: linha 0, sem texto original
    """

    error_type = CONFIG_NOT_FOUND


class ConfigReadError(OwlConfigError):
    """
    Exceção levantada quando um arquivo `.owl` existe mas não pode ser lido
    (diretório no lugar do arquivo, permissão negada, falha de E/S).

    Decisões arquiteturais:
        - Erro de arquivo inteiro: linha 0, sem texto original
        - Bytes fora de UTF-8 não são falha de leitura (decodificação tolerante)
    """

    error_type = CONFIG_READ_ERROR


class UnsupportedExportFormatError(ValueError):
    """Formato de exportação não suportado (v1: YAML/JSON)."""

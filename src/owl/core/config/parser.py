# src/owl/core/config/parser.py
"""
Parser canônico de arquivos `.owl` (tokens → AST).

Este módulo consome os tokens de **um** arquivo, aplica as regras de
gramática e de contexto de cada diretiva e produz um nó `Program`.

Regras aplicadas em tempo de parse:
    - `@packages` abre um bloco de nomes; qualquer diretiva o encerra
    - `@package a, b, c` declara pacotes; o último vira o pacote atual
    - `@group`, `@env`, `@script` não exigem pacote atual
    - `:config`, `:env`, `:service`, `:script` e `!setup` exigem pacote atual
    - TEXT fora de bloco `@packages` é sempre erro

Decisões arquiteturais:
    - O estado do parser (cursor, bloco, pacote atual) é um objeto
      explícito (`ParserState`), o que mantém o parser reentrante
    - Falha rápida: o primeiro erro interrompe o arquivo, sem recuperação
    - Nós de pacote registram o pacote atual, dispensando o resolver
      de reconstruir o contexto

Invariantes:
    - A ordem de `Program.body` é a ordem das linhas do arquivo
    - Todo nó carrega arquivo, linha e texto original

Limites explícitos:
    - Não resolve grupos
    - Não acessa filesystem
    - Não mescla entradas
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from .errors import ContextError, StructuralError, UnknownDirectiveError
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
    PropValue,
)
from .paths import is_valid_group_name
from .tokens import SIGILS, Token, TokenKind

_ASSIGN_RE = re.compile(r"^(\S+)\s*=\s*(.+)$")
_MAPPING_RE = re.compile(r"^(\S+)\s*->\s*(\S+)$")
_SERVICE_RE = re.compile(r"^([^\s\[\]]+)(?:\s*\[(.+)\])?\s*$")
_BOOL_RE = re.compile(r"^(true|false)$", re.IGNORECASE)

_DIRECTIVE_NAMES: Dict[TokenKind, str] = {
    TokenKind.PKG_CONFIG: ":config",
    TokenKind.PKG_ENV: ":env",
    TokenKind.PKG_SERVICE: ":service",
    TokenKind.PKG_SCRIPT: ":script",
    TokenKind.LEGACY_SETUP: "!setup",
}


@dataclass
class ParserState:
    """Cursor e contexto explícitos de um parse."""

    position: int = 0
    in_packages_block: bool = False
    current_package: Optional[str] = None


def parse_service_props(token: Token, props_raw: str) -> Dict[str, PropValue]:
    """
    Interpreta `chave=valor, chave2=valor2` de uma diretiva `:service`.

    Valores `true`/`false` (qualquer caixa) viram booleanos; os demais
    permanecem strings.

    Raises:
        StructuralError: Se alguma propriedade não seguir `chave=valor`.
    """
    props: Dict[str, PropValue] = {}
    for part in (p.strip() for p in props_raw.split(",")):
        if not part:
            continue
        match = _ASSIGN_RE.match(part)
        if not match:
            raise StructuralError(
                token.source_file,
                token.line_number,
                token.raw_line,
                f'Invalid service property "{part}": expected "<key>=<value>"',
            )
        key, raw_value = match.group(1), match.group(2).strip()
        value: PropValue = raw_value
        if _BOOL_RE.match(raw_value):
            value = raw_value.lower() == "true"
        props[key] = value
    return props


class Parser:
    """
    Parser de um único arquivo `.owl`.

    Uso:
        program = Parser(tokens).parse()
    """

    def __init__(self, tokens: Sequence[Token]):
        self.tokens = list(tokens)
        self.source_file = self.tokens[0].source_file if self.tokens else "<unknown>"
        self.state = ParserState()
        self._handlers: Dict[TokenKind, Callable[[Token], None]] = {
            TokenKind.PACKAGES: self._parse_packages,
            TokenKind.TEXT: self._parse_text,
            TokenKind.PACKAGE: self._parse_package,
            TokenKind.GROUP: self._parse_group,
            TokenKind.ENV: self._parse_global_env,
            TokenKind.SCRIPT: self._parse_global_script,
            TokenKind.PKG_CONFIG: self._parse_config,
            TokenKind.PKG_ENV: self._parse_package_env,
            TokenKind.PKG_SERVICE: self._parse_service,
            TokenKind.PKG_SCRIPT: self._parse_package_script,
            TokenKind.LEGACY_SETUP: self._parse_package_script,
        }
        self._body: List = []

    def parse(self) -> Program:
        self.state = ParserState()
        self._body = []
        while self.state.position < len(self.tokens):
            token = self.tokens[self.state.position]
            if token.kind is TokenKind.EOF:
                break
            if token.kind not in (TokenKind.TEXT, TokenKind.PACKAGES):
                self.state.in_packages_block = False
            self._handlers[token.kind](token)
            self.state.position += 1
        return Program(source_file=self.source_file, body=self._body)

    # -----------------------------
    # Helpers
    # -----------------------------

    def _fail(self, token: Token, message: str) -> StructuralError:
        return StructuralError(token.source_file, token.line_number, token.raw_line, message)

    def _require_package(self, token: Token) -> str:
        if self.state.current_package is None:
            raise ContextError(
                token.source_file,
                token.line_number,
                token.raw_line,
                f"Package context required before {_DIRECTIVE_NAMES[token.kind]}",
            )
        return self.state.current_package

    def _origin(self, token: Token) -> dict:
        return {"line": token.line_number, "source_file": token.source_file, "raw": token.raw_line}

    # -----------------------------
    # Diretivas globais
    # -----------------------------

    def _parse_packages(self, token: Token) -> None:
        if token.payload:
            raise self._fail(token, "@packages does not take arguments; list package names on the following lines")
        self.state.in_packages_block = True
        self.state.current_package = None
        self._body.append(PackagesBlockStart(**self._origin(token)))

    def _parse_text(self, token: Token) -> None:
        text = token.payload
        if text.startswith(SIGILS):
            raise UnknownDirectiveError(
                token.source_file,
                token.line_number,
                token.raw_line,
                f"Unknown directive: {text.split()[0]}",
            )
        if not self.state.in_packages_block:
            raise self._fail(
                token,
                f'Unrecognized line: "{text}". Expected a directive or a package name inside an @packages block',
            )
        self._body.append(PackagesBlockItem(name=text, **self._origin(token)))

    def _parse_package(self, token: Token) -> None:
        names = [n.strip() for n in token.payload.split(",") if n.strip()]
        if not names:
            raise self._fail(token, "Package name cannot be empty")
        for name in names:
            self._body.append(PackageDecl(name=name, **self._origin(token)))
        self.state.current_package = names[-1]

    def _parse_group(self, token: Token) -> None:
        if not token.payload:
            raise self._fail(token, "Group name cannot be empty")
        if not is_valid_group_name(token.payload):
            raise self._fail(
                token,
                f'Invalid group name "{token.payload}": use letters, digits, "_", "-" and "/" between segments',
            )
        self._body.append(GroupInclude(name=token.payload, **self._origin(token)))

    def _parse_global_env(self, token: Token) -> None:
        match = _ASSIGN_RE.match(token.payload)
        if not match:
            raise self._fail(token, '@env must follow format "@env <KEY> = <VALUE>"')
        self._body.append(GlobalEnvDecl(key=match.group(1), value=match.group(2).strip(), **self._origin(token)))

    def _parse_global_script(self, token: Token) -> None:
        if not token.payload:
            raise self._fail(token, "Script cannot be empty")
        self._body.append(GlobalScriptDecl(script=token.payload, **self._origin(token)))

    # -----------------------------
    # Diretivas de pacote
    # -----------------------------

    def _parse_config(self, token: Token) -> None:
        package = self._require_package(token)
        match = _MAPPING_RE.match(token.payload)
        if not match:
            raise self._fail(token, ':config must follow format ":config <source> -> <destination>"')
        self._body.append(
            PackageConfigMapping(package=package, source=match.group(1), dest=match.group(2), **self._origin(token))
        )

    def _parse_package_env(self, token: Token) -> None:
        package = self._require_package(token)
        match = _ASSIGN_RE.match(token.payload)
        if not match:
            raise self._fail(token, ':env must follow format ":env <KEY> = <VALUE>"')
        self._body.append(
            PackageEnvDecl(package=package, key=match.group(1), value=match.group(2).strip(), **self._origin(token))
        )

    def _parse_service(self, token: Token) -> None:
        package = self._require_package(token)
        if not token.payload:
            raise self._fail(token, "Service cannot be empty")
        match = _SERVICE_RE.match(token.payload)
        if not match:
            raise self._fail(token, 'Invalid service syntax: expected ":service <name> [key=value, ...]"')
        props = parse_service_props(token, match.group(2) or "")
        self._body.append(PackageServiceDecl(package=package, name=match.group(1), props=props, **self._origin(token)))

    def _parse_package_script(self, token: Token) -> None:
        package = self._require_package(token)
        legacy = token.kind is TokenKind.LEGACY_SETUP
        if not token.payload:
            raise self._fail(token, "Setup script cannot be empty" if legacy else "Script cannot be empty")
        self._body.append(
            PackageScriptDecl(package=package, script=token.payload, legacy=legacy, **self._origin(token))
        )


def parse_tokens(tokens: Sequence[Token]) -> Program:
    """Atalho funcional para `Parser(tokens).parse()`."""
    return Parser(tokens).parse()

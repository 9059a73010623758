# src/owl/core/config/tokens.py
"""
Tokenizador canônico dos arquivos `.owl`.

Este módulo converte o texto bruto de um arquivo em uma sequência de
tokens orientada a linhas, encerrada por um token `EOF`.

Política de tokenização (v1):
    - Uma diretiva por linha física
    - Comentários `#` são removidos fora de aspas simples/duplas
    - Barra invertida escapa o caractere seguinte
    - Aspas não terminadas são toleradas (o resto da linha é citado)
    - Linhas vazias após a remoção de comentários são ignoradas
    - A primeira palavra da linha decide o tipo do token

Decisões arquiteturais:
    - O tokenizador nunca falha: validade de TEXT é problema do parser
    - `!setup` recebe um tipo próprio para permitir aviso de depreciação,
      mas tem a mesma semântica de `:script`

Invariantes:
    - A sequência sempre termina com exatamente um `EOF`
    - O `EOF` aponta para a linha seguinte à última linha do arquivo
    - `raw_line` preserva a linha original, incluindo comentários

Limites explícitos:
    - Não valida formato de diretivas
    - Não conhece contexto de pacote
    - Não acessa filesystem
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple


class TokenKind(str, Enum):
    PACKAGES = "PACKAGES"
    PACKAGE = "PACKAGE"
    ENV = "ENV"
    GROUP = "GROUP"
    SCRIPT = "SCRIPT"
    PKG_CONFIG = "PKG_CONFIG"
    PKG_ENV = "PKG_ENV"
    PKG_SERVICE = "PKG_SERVICE"
    PKG_SCRIPT = "PKG_SCRIPT"
    LEGACY_SETUP = "LEGACY_SETUP"
    TEXT = "TEXT"
    EOF = "EOF"


# Ordem fixa de reconhecimento de diretivas.
DIRECTIVES: Tuple[Tuple[str, TokenKind], ...] = (
    ("@packages", TokenKind.PACKAGES),
    ("@package", TokenKind.PACKAGE),
    ("@env", TokenKind.ENV),
    ("@group", TokenKind.GROUP),
    ("@script", TokenKind.SCRIPT),
    (":config", TokenKind.PKG_CONFIG),
    (":env", TokenKind.PKG_ENV),
    (":service", TokenKind.PKG_SERVICE),
    (":script", TokenKind.PKG_SCRIPT),
    ("!setup", TokenKind.LEGACY_SETUP),
)

SIGILS = ("@", ":", "!")

_LINE_SPLIT_RE = re.compile(r"\r?\n")


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    raw_line: str
    line_number: int
    source_file: str
    payload: str = ""


def strip_inline_comment(line: str) -> str:
    """
    Remove o comentário inline de uma linha, respeitando aspas.

    Um `#` só inicia comentário fora de aspas. Dentro ou fora delas, a
    barra invertida escapa o próximo caractere (que é mantido no texto,
    junto com a própria barra).

    Args:
        line (str): Linha original.

    Returns:
        str: Linha sem comentário, aparada nas pontas.
    """
    out: List[str] = []
    quote = ""
    escaped = False
    for ch in line:
        if escaped:
            out.append(ch)
            escaped = False
            continue
        if ch == "\\":
            out.append(ch)
            escaped = True
            continue
        if not quote and ch in ("'", '"'):
            quote = ch
        elif quote and ch == quote:
            quote = ""
        elif not quote and ch == "#":
            break
        out.append(ch)
    return "".join(out).strip()


def _classify(line: str) -> Tuple[TokenKind, str]:
    parts = line.split(None, 1)
    keyword = parts[0]
    rest = parts[1].strip() if len(parts) > 1 else ""
    for directive, kind in DIRECTIVES:
        if keyword == directive:
            return kind, rest
    return TokenKind.TEXT, line


def tokenize(text: str, source_file: str) -> List[Token]:
    """
    Converte o texto de um arquivo `.owl` em tokens.

    Args:
        text (str): Conteúdo bruto do arquivo.
        source_file (str): Identificador do arquivo (caminho absoluto).

    Returns:
        List[Token]: Tokens em ordem de arquivo, terminados por `EOF`.
    """
    lines = _LINE_SPLIT_RE.split(text)
    tokens: List[Token] = []

    for index, raw_line in enumerate(lines):
        line = strip_inline_comment(raw_line)
        if not line:
            continue
        kind, payload = _classify(line)
        tokens.append(
            Token(
                kind=kind,
                raw_line=raw_line,
                line_number=index + 1,
                source_file=source_file,
                payload=payload,
            )
        )

    tokens.append(
        Token(
            kind=TokenKind.EOF,
            raw_line="",
            line_number=len(lines) + 1,
            source_file=source_file,
        )
    )
    return tokens

# tests/core/config/test_tokens.py
"""
Testes do tokenizador de arquivos `.owl`.

Os testes asseguram que:
- comentários são removidos apenas fora de aspas
- linhas vazias e de comentário não geram tokens
- cada diretiva é reconhecida pelo seu tipo, com o restante como payload
- `!setup` é reconhecido como alias depreciado
- linhas desconhecidas viram TEXT (validade é problema do parser)
- a sequência termina com EOF na linha seguinte à última
"""

import pytest

from owl.core.config.tokens import TokenKind, strip_inline_comment, tokenize


@pytest.mark.parametrize(
    "line, expected",
    [
        (":config a -> b # trailing comment", ":config a -> b"),
        (':env KEY = "value # not a comment"', ':env KEY = "value # not a comment"'),
        (":env KEY = 'it # stays' # goes", ":env KEY = 'it # stays'"),
        (r':env KEY = "escaped \" quote # kept"', r':env KEY = "escaped \" quote # kept"'),
        ("# whole line", ""),
        ('@env X = "unterminated # kept', '@env X = "unterminated # kept'),
        ("  @package git   ", "@package git"),
    ],
)
def test_strip_inline_comment(line, expected):
    assert strip_inline_comment(line) == expected


def test_directive_kinds_and_payloads():
    source = "\n".join(
        [
            "@packages",
            "@package neovim",
            "@env EDITOR = nvim",
            "@group base",
            "@script bootstrap.sh",
            ":config nvim -> ~/.config/nvim",
            ":env FOO = bar",
            ":service sshd [enable=true]",
            ":script post.sh",
            "!setup legacy.sh",
            "ripgrep",
        ]
    )
    tokens = tokenize(source, "/owl/main.owl")

    kinds = [t.kind for t in tokens]
    assert kinds == [
        TokenKind.PACKAGES,
        TokenKind.PACKAGE,
        TokenKind.ENV,
        TokenKind.GROUP,
        TokenKind.SCRIPT,
        TokenKind.PKG_CONFIG,
        TokenKind.PKG_ENV,
        TokenKind.PKG_SERVICE,
        TokenKind.PKG_SCRIPT,
        TokenKind.LEGACY_SETUP,
        TokenKind.TEXT,
        TokenKind.EOF,
    ]
    assert tokens[1].payload == "neovim"
    assert tokens[5].payload == "nvim -> ~/.config/nvim"
    assert tokens[9].payload == "legacy.sh"
    assert tokens[10].payload == "ripgrep"


def test_blank_and_comment_lines_are_skipped_but_line_numbers_kept():
    source = "# header\n\n@package git\n   \n:script x.sh # run\n"
    tokens = tokenize(source, "main.owl")

    assert [(t.kind, t.line_number) for t in tokens] == [
        (TokenKind.PACKAGE, 3),
        (TokenKind.PKG_SCRIPT, 5),
        (TokenKind.EOF, 7),
    ]
    assert tokens[1].raw_line == ":script x.sh # run"
    assert tokens[1].payload == "x.sh"
    assert all(t.source_file == "main.owl" for t in tokens)


def test_empty_source_yields_only_eof():
    tokens = tokenize("", "empty.owl")
    assert len(tokens) == 1
    assert tokens[0].kind is TokenKind.EOF
    assert tokens[0].line_number == 2


def test_keyword_must_be_whole_word():
    tokens = tokenize("@packagesfoo\n@package\n:configx a -> b", "main.owl")
    assert tokens[0].kind is TokenKind.TEXT
    assert tokens[1].kind is TokenKind.PACKAGE
    assert tokens[1].payload == ""
    assert tokens[2].kind is TokenKind.TEXT


def test_crlf_line_endings():
    tokens = tokenize("@package a\r\n:script s.sh\r\n", "main.owl")
    assert tokens[0].payload == "a"
    assert tokens[1].payload == "s.sh"
    assert tokens[1].line_number == 2

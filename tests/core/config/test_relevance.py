# tests/core/config/test_relevance.py
"""
Testes da descoberta de arquivos `.owl` relevantes para um host.

Os testes asseguram que:
- main e host vêm primeiro, seguidos dos grupos incluídos
- grupos aninhados aparecem uma única vez
- grupos ausentes e arquivos ausentes são ignorados
- arquivos com erros de parse ainda são varridos
- bytes fora de UTF-8 não impedem a varredura
- diretórios no lugar de arquivos e nomes de grupo inválidos são ignorados
"""

from owl.core.config.relevance import relevant_config_files


def test_roots_then_groups_in_discovery_order(owl_root, write_owl):
    main = write_owl("main.owl", "@group base\n@group dev\n")
    host = write_owl("hosts/box.owl", "@group gaming\n")
    base = write_owl("groups/base.owl", "@group common\n")
    common = write_owl("groups/common.owl", "@package coreutils\n")
    dev = write_owl("groups/dev.owl", "@group common\n")
    gaming = write_owl("groups/gaming.owl", "@package steam\n")

    files = relevant_config_files("box", owl_root=owl_root)

    assert files == [main, host, base, common, dev, gaming]


def test_missing_groups_and_host_are_skipped(owl_root, write_owl):
    main = write_owl("main.owl", "@group ghost\n@group real\n")
    real = write_owl("groups/real.owl", "@package x\n")

    assert relevant_config_files("nohost", owl_root=owl_root) == [main, real]


def test_broken_files_are_still_scanned(owl_root, write_owl):
    main = write_owl("main.owl", ":config orphan -> ~/.x\n@group tools\nnot a directive\n")
    tools = write_owl("groups/tools.owl", "@group tools\n")

    assert relevant_config_files("box", owl_root=owl_root) == [main, tools]


def test_empty_root_yields_nothing(owl_root):
    assert relevant_config_files("box", owl_root=owl_root) == []


def test_non_utf8_files_are_scanned(owl_root, write_owl):
    main = owl_root / "main.owl"
    main.write_bytes(b"@env K = \xff\n@group tools\n")
    tools = write_owl("groups/tools.owl", "@package rg\n")

    assert relevant_config_files("box", owl_root=owl_root) == [main, tools]


def test_directories_in_place_of_files_are_skipped(owl_root, write_owl):
    (owl_root / "main.owl").mkdir()
    host = write_owl("hosts/box.owl", "@group ghost\n@group real\n")
    (owl_root / "groups" / "ghost.owl").mkdir()
    real = write_owl("groups/real.owl", "@package x\n")

    assert relevant_config_files("box", owl_root=owl_root) == [host, real]


def test_group_names_outside_groups_dir_are_ignored(owl_root, write_owl):
    main = write_owl("main.owl", "@group ../hosts/box\n")
    host = write_owl("hosts/box.owl", "@package secret\n")

    assert relevant_config_files("other", owl_root=owl_root) == [main]
    assert host.exists()

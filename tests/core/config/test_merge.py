# tests/core/config/test_merge.py
"""
Testes da política de merge de entradas de pacote.

Este módulo valida `merge_entry` e `merge_entries_into`, responsáveis
por combinar declarações do mesmo pacote vindas de fontes diferentes
(grupos dentro de um arquivo, host sobre global).

Os testes asseguram que:
- listas não vazias da entrada mais recente substituem as anteriores
- listas vazias da entrada mais recente preservam as anteriores
- a identidade (arquivo, tipo de fonte, grupo) é sempre a mais recente
- entradas de pacotes diferentes não são mescladas
- objetos de entrada não são mutados

Decisões arquiteturais:
    - Nunca há união de listas ("último não vazio vence")
    - A ordem de chegada define a precedência

Invariantes:
    - No máximo uma entrada por pacote no mapa resultante
    - Pacotes apenas da base preservam posição

Limites explícitos:
    - Não valida leitura de arquivos
    - Não valida expansão de grupos
"""

import pytest

try:
    from owl.core.config.merge import merge_entries_into, merge_entry
    from owl.core.config.model import ConfigMapping, Entry, EnvVar, ServiceSpec
except Exception as e:  # noqa: BLE001
    merge_entry = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que o módulo de merge esteja disponível para os testes.

    Decisões arquiteturais:
        - Falha antecipada e explícita quando o contrato de merge está ausente
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing merge module. Implement:\n"
            "- src/owl/core/config/merge.py (merge_entry, merge_entries_into)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def _entry(package="nvim", source_file="/owl/main.owl", source_kind="main", group_name=None, **lists):
    return Entry(
        package=package,
        source_file=source_file,
        source_kind=source_kind,
        group_name=group_name,
        **lists,
    )


def test_non_empty_lists_replace_existing():
    """
    Verifica que listas não vazias da entrada recente substituem, sem união.

    Invariantes:
        - `configs` reflete exatamente a entrada recente
        - Não há concatenação entre fontes
    """
    _require_imports()
    base = _entry(configs=[ConfigMapping("/d/a", "~/.a")], setups=["a.sh"])
    override = _entry(
        source_file="/owl/hosts/box.owl",
        source_kind="host",
        configs=[ConfigMapping("/d/b", "~/.b")],
    )

    merged = merge_entry(base, override)

    assert merged.configs == [ConfigMapping("/d/b", "~/.b")]
    assert merged.setups == ["a.sh"]


def test_empty_lists_keep_existing():
    _require_imports()
    base = _entry(
        services=[ServiceSpec(name="sshd")],
        envs=[EnvVar("A", "1")],
    )
    merged = merge_entry(base, _entry(source_kind="host"))

    assert merged.services == [ServiceSpec(name="sshd")]
    assert merged.envs == [EnvVar("A", "1")]


def test_identity_comes_from_latest_entry():
    _require_imports()
    base = _entry(source_file="/owl/groups/dev.owl", source_kind="group", group_name="dev")
    override = _entry(source_file="/owl/hosts/box.owl", source_kind="host")

    merged = merge_entry(base, override)

    assert merged.source_file == "/owl/hosts/box.owl"
    assert merged.source_kind == "host"
    assert merged.group_name is None


def test_merge_does_not_mutate_inputs():
    """
    Garante que `merge_entry` é puramente funcional.

    Invariantes:
        - Listas das entradas originais permanecem idênticas
        - A entrada resultante não compartilha listas com os inputs
    """
    _require_imports()
    base = _entry(setups=["a.sh"])
    override = _entry(configs=[ConfigMapping("/d/x", "~/.x")])

    merged = merge_entry(base, override)
    merged.setups.append("b.sh")
    merged.configs.append(ConfigMapping("/d/y", "~/.y"))

    assert base.setups == ["a.sh"]
    assert base.configs == []
    assert override.configs == [ConfigMapping("/d/x", "~/.x")]


def test_different_packages_are_rejected():
    _require_imports()
    with pytest.raises(ValueError):
        merge_entry(_entry(package="git"), _entry(package="curl"))


def test_merge_entries_into_keeps_positions_and_appends_new(resolve_ctx):
    _require_imports()
    target = {
        "git": _entry(package="git"),
        "curl": _entry(package="curl", setups=["c.sh"]),
    }
    incoming = [
        _entry(package="wget", source_kind="host"),
        _entry(package="git", source_kind="host", setups=["g.sh"]),
    ]

    result = merge_entries_into(target, incoming, context=resolve_ctx)

    assert result is target
    assert list(target) == ["git", "curl", "wget"]
    assert target["git"].setups == ["g.sh"]
    assert target["git"].source_kind == "host"
    assert target["curl"].setups == ["c.sh"]
    assert [e["package"] for e in resolve_ctx.events_with("entry merged")] == ["git"]

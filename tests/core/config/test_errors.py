# tests/core/config/test_errors.py
"""
Testes das exceções tipadas e do diagnóstico canônico.

Os testes asseguram que:
- `str(exc)` é a renderização `<arquivo>:<linha>: <mensagem>` + linha original
- a hierarquia permite captura genérica via `OwlConfigError`
- `to_payload()` produz um payload estável e serializável
"""

import json

import pytest

from owl.core.config.diagnostics import Diagnostic
from owl.core.config.errors import (
    ConfigReadError,
    ContextError,
    CycleError,
    GlobalConfigNotFoundError,
    GroupReferenceError,
    OwlConfigError,
    StructuralError,
    UnknownDirectiveError,
)
from owl.core.errors import (
    CONFIG_CYCLE_ERROR,
    CONFIG_REFERENCE_ERROR,
    CONFIG_STRUCTURAL_ERROR,
    DEFAULT_HINTS,
)


def test_diagnostic_render_trims_raw_line():
    diag = Diagnostic("/owl/main.owl", 3, "   :config broken   ", "bad format")
    assert diag.render() == "/owl/main.owl:3: bad format\n  -> :config broken"


def test_error_str_is_rendered_diagnostic():
    err = StructuralError("/owl/main.owl", 7, "@env X", "invalid")
    assert str(err) == "/owl/main.owl:7: invalid\n  -> @env X"
    assert err.diagnostic.line_number == 7


@pytest.mark.parametrize(
    "exc",
    [
        StructuralError("f", 1, "x", "m"),
        ContextError("f", 1, "x", "m"),
        UnknownDirectiveError("f", 1, "x", "m"),
        GlobalConfigNotFoundError("f", 0, "", "m"),
        ConfigReadError("f", 0, "", "m"),
        GroupReferenceError("f", 1, "x", "m", group_path="/g.owl"),
        CycleError("f", 1, "x", "m", group="g"),
    ],
)
def test_all_errors_share_base_class(exc):
    assert isinstance(exc, OwlConfigError)
    with pytest.raises(OwlConfigError):
        raise exc


def test_structural_payload():
    payload = StructuralError("/owl/main.owl", 2, "  :env KEY ", "bad env").to_payload()

    assert payload.type == CONFIG_STRUCTURAL_ERROR
    assert payload.message == "bad env"
    assert payload.details == {"source_file": "/owl/main.owl", "line_number": 2, "raw_line": ":env KEY"}
    assert payload.hint == DEFAULT_HINTS[CONFIG_STRUCTURAL_ERROR]


def test_reference_and_cycle_payload_extras():
    ref = GroupReferenceError("/owl/main.owl", 1, "@group x", "missing", group_path="/owl/groups/x.owl")
    cyc = CycleError("/owl/groups/a.owl", 1, "@group a", "cycle", group="a")

    assert ref.to_payload().type == CONFIG_REFERENCE_ERROR
    assert ref.to_payload().details["group_path"] == "/owl/groups/x.owl"
    assert cyc.to_payload().type == CONFIG_CYCLE_ERROR
    assert cyc.to_payload().details["group"] == "a"


def test_payload_is_json_serializable():
    payload = CycleError("/owl/groups/a.owl", 4, "@group a", "cycle", group="a").to_payload()
    data = json.loads(json.dumps(payload.to_dict()))
    assert set(data) == {"type", "message", "details", "hint"}

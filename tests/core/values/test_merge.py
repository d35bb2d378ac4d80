# tests/core/values/test_merge.py
"""
Testes da política de deep-merge de values.

Este módulo valida o comportamento da função `merge_maps`, responsável
por sobrepor um mapa de values (overlay) a outro (base).

Os testes asseguram que:
- valores escalares são sobrescritos corretamente
- dicionários são mesclados de forma recursiva
- listas são sobrescritas integralmente
- conflitos de tipo são resolvidos a favor do overlay
- objetos de entrada não são mutados durante o merge

Limites explícitos:
    - Não valida leitura de documentos YAML
    - Não valida integração com o loader de charts
"""

import pytest

try:
    from atlas_charts.core.values.merge import merge_maps
    from atlas_charts.core.values.errors import ValuesTypeError
except Exception as e:  # noqa: BLE001
    merge_maps = None
    ValuesTypeError = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que os módulos de merge de values estejam disponíveis para os testes.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing values merge modules. Implement:\n"
            "- src/atlas_charts/core/values/merge.py (merge_maps)\n"
            "- src/atlas_charts/core/values/errors.py (ValuesTypeError)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_merge_simple_override():
    """
    Verifica o comportamento básico de override de valores escalares.

    Invariantes:
        - O valor sobrescrito reflete exatamente o overlay
        - Chaves não sobrescritas permanecem inalteradas
        - `base` e `overlay` não sofrem mutação
    """
    _require_imports()
    base = {"a": 1, "b": 2}
    overlay = {"b": 99}
    out = merge_maps(base, overlay)
    assert out == {"a": 1, "b": 99}
    assert base == {"a": 1, "b": 2}
    assert overlay == {"b": 99}


def test_merge_nested_overlay_precedence():
    _require_imports()
    out = merge_maps({"x": {"a": 1, "b": 2}}, {"x": {"b": 3}})
    assert out == {"x": {"a": 1, "b": 3}}


def test_merge_adds_overlay_only_keys():
    _require_imports()
    out = merge_maps({"a": {"b": 1}}, {"a": {"c": 2}, "d": None})
    assert out == {"a": {"b": 1, "c": 2}, "d": None}


def test_merge_list_override_total():
    """
    Verifica que listas são sobrescritas integralmente durante o deep-merge.

    Decisões arquiteturais:
        - Listas não são mescladas elemento a elemento
        - Listas nunca são concatenadas nem unidas
    """
    _require_imports()
    base = {"ports": [80, 443]}
    overlay = {"ports": [8080]}
    assert merge_maps(base, overlay) == {"ports": [8080]}


def test_merge_type_mismatch_overlay_wins():
    """
    Verifica que conflitos de tipo não levantam erro: o overlay substitui.

    Casos cobertos:
        - mapa substituído por lista
        - mapa substituído por escalar
        - escalar substituído por mapa
    """
    _require_imports()
    assert merge_maps({"x": {"a": 1}}, {"x": [1, 2]}) == {"x": [1, 2]}
    assert merge_maps({"x": {"a": 1}}, {"x": "DEBUG"}) == {"x": "DEBUG"}
    assert merge_maps({"x": 1}, {"x": {"a": 1}}) == {"x": {"a": 1}}


def test_merge_is_idempotent_for_repeated_overlay():
    _require_imports()
    a = {"x": {"a": 1, "b": [1, 2]}, "y": "keep"}
    b = {"x": {"b": [3], "c": {"d": True}}, "z": 0}
    once = merge_maps(a, b)
    assert merge_maps(once, b) == once


def test_merge_result_shares_no_structure_with_inputs():
    _require_imports()
    base = {"x": {"a": [1]}}
    overlay = {"y": {"b": [2]}}
    out = merge_maps(base, overlay)

    out["x"]["a"].append(99)
    out["y"]["b"].append(99)

    assert base == {"x": {"a": [1]}}
    assert overlay == {"y": {"b": [2]}}


def test_merge_rejects_non_mapping_roots():
    _require_imports()
    with pytest.raises(ValuesTypeError):
        merge_maps({"a": 1}, [1, 2])  # type: ignore[arg-type]
    with pytest.raises(ValuesTypeError):
        merge_maps(None, {"a": 1})  # type: ignore[arg-type]

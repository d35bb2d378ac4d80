# tests/core/loader/test_load_context.py
"""
Testes do LoadContext e dos eventos emitidos durante o carregamento.

Invariantes verificadas:
    - Eventos sempre incluem `load_id`, `chart`, `level` e `timestamp`
    - Warnings são agrupados por chart
    - Eventos de subcharts e do chart raiz vão para o mesmo contexto
"""

import pytest

from atlas_charts.core.loader.assemble import load_files
from atlas_charts.core.loader.errors import SubchartUnpackError
from atlas_charts.core.values.hashing import compute_values_digest


def test_log_event_shape(load_ctx):
    load_ctx.log(chart="web", level="info", message="hello", extra_field=1)
    event = load_ctx.events[0]
    assert event["load_id"] == "load-test-001"
    assert event["chart"] == "web"
    assert event["level"] == "info"
    assert event["message"] == "hello"
    assert event["extra_field"] == 1
    assert event["timestamp"].endswith("+00:00")


def test_add_warning_groups_by_chart(load_ctx):
    load_ctx.add_warning(chart="web", message="a")
    load_ctx.add_warning(chart="web", message="b")
    load_ctx.add_warning(chart="db", message="c")
    assert load_ctx.warnings == {"web": ["a", "b"], "db": ["c"]}


def test_load_files_emits_events_for_whole_tree(load_ctx, make_files, make_chart_yaml):
    files = make_files(
        {
            "Chart.yaml": make_chart_yaml("root"),
            "values.yaml": b"a: 1\n",
            "charts/db/Chart.yaml": make_chart_yaml("db"),
            "charts/_skip/x": b"x",
            "charts/loose.txt": b"x",
        }
    )

    with pytest.raises(SubchartUnpackError):
        load_files(files, load_ctx)

    messages = [(e["chart"], e["message"]) for e in load_ctx.events]
    assert ("root", "subchart skipped") in messages
    assert ("loose.txt", "subchart member dropped") in messages


def test_chart_loaded_event_carries_values_digest(load_ctx, make_files, make_chart_yaml):
    files = make_files(
        {
            "Chart.yaml": make_chart_yaml("root"),
            "values.yaml": b"a: 1\n",
            "charts/db/Chart.yaml": make_chart_yaml("db"),
        }
    )
    load_files(files, load_ctx)

    loaded = [e for e in load_ctx.events if e["message"] == "chart loaded"]
    assert [e["chart"] for e in loaded] == ["db", "root"]
    root_event = loaded[-1]
    assert root_event["values_digest"] == compute_values_digest({"a": 1})
    assert root_event["dependencies"] == 1

# src/atlas_charts/core/loader/context.py
"""
Contexto de carregamento de charts.

Este módulo define o `LoadContext`, a estrutura canônica utilizada para
registrar eventos estruturados e warnings durante o carregamento de um
chart e de todos os seus subcharts.

Princípios fundamentais:
    - Isolamento por carregamento (cada load possui seu próprio contexto)
    - Ausência de estado global ou logger compartilhado
    - Eventos estruturados e rastreáveis

Invariantes:
    - Eventos sempre incluem `load_id`, `chart` e `timestamp` (UTC)
    - Warnings são agrupados pelo caminho do chart
    - Registrar um evento nunca altera o resultado do carregamento

Limites explícitos:
    - Não monta charts
    - Não persiste eventos
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List
from datetime import timezone


@dataclass
class LoadContext:
    """
    Contexto de um carregamento de chart.

    O contexto é passado explicitamente ao loader e repassado às chamadas
    recursivas de subcharts; eventos de toda a árvore ficam em uma única
    lista ordenada.
    """

    load_id: str
    created_at: datetime
    meta: Dict[str, Any] = field(default_factory=dict)

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, chart: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "load_id": self.load_id,
            "chart": chart,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, chart: str, message: str) -> None:
        if chart not in self.warnings:
            self.warnings[chart] = []
        self.warnings[chart].append(message)

# src/atlas_charts/core/loader/assemble.py
"""
Montagem canônica de charts a partir de arquivos em memória.

Este módulo é responsável por transformar uma lista plana e ordenada de
`BufferedFile` em um `Chart` completo, resolvendo recursivamente os
subcharts encontrados em `charts/` em uma árvore de dependências.

Fluxo de montagem:
    1. Primeira passada: copia toda entrada para `raw` e decodifica
       todo `Chart.yaml` (cada um sobrepõe as chaves do anterior)
    2. Ausência de `Chart.yaml` → `MissingMetadataError`
    3. `apiVersion` ausente recebe o default `v3`
    4. Segunda passada: classifica os demais arquivos (lock, values,
       schema, templates, arquivos, grupos de subchart)
    5. Validação estrutural → `ChartValidationError` com o chart parcial
    6. Cada grupo de subchart é montado e anexado via `add_dependency`
    7. O chart montado é retornado

Princípios fundamentais:
    - Erros de parse abortam a montagem inteira (sem values parciais)
    - Falha em qualquer subchart é fatal para o chart pai
    - Nenhum estado é compartilhado entre subcharts irmãos

Invariantes:
    - Toda entrada aparece em `raw`, na ordem original, byte a byte
    - Grupos iniciados por `_` ou `.` nunca viram dependências
    - A recursão desce exatamente um segmento de caminho por nível

Limites explícitos:
    - A ordem de `dependencies` não é garantida para chamadores
    - Não percorre filesystem nem aplica `.helmignore`
    - Não resolve versões nem deduplica subcharts idênticos
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

import yaml  # PyYAML

from atlas_charts.core.chart.errors import ChartFieldError
from atlas_charts.core.chart.model import APIVERSION_V3, Chart, ChartFile, Lock, Metadata
from atlas_charts.core.values.errors import ValuesError
from atlas_charts.core.values.hashing import compute_values_digest
from atlas_charts.core.values.loader import load_values

from .archive import read_archive
from .classify import (
    CHART_FILE,
    FileKind,
    classify,
    is_archive_group,
    is_excluded_group,
)
from .context import LoadContext
from .errors import (
    LoadError,
    LockParseError,
    MetadataParseError,
    MissingMetadataError,
    SubchartNamingMismatchError,
    SubchartUnpackError,
    ChartValidationError,
    ValuesParseError,
)
from .types import BufferedFile


DEFAULT_API_VERSION = APIVERSION_V3


def _decode_yaml(data: bytes) -> object:
    return yaml.safe_load(data)


def _parse_metadata(
    data: bytes,
    previous: Optional[Dict[str, Any]] = None,
) -> Tuple[Dict[str, Any], Metadata]:
    try:
        doc = _decode_yaml(data)
        doc = {} if doc is None else doc
        if previous is not None and isinstance(doc, dict):
            # um Chart.yaml posterior sobrepõe apenas as chaves que declara
            doc = {**previous, **doc}
        return doc, Metadata.from_dict(doc)
    except (yaml.YAMLError, ChartFieldError) as e:
        raise MetadataParseError(f"cannot load {CHART_FILE}: {e}") from e


def _parse_lock(data: bytes) -> Lock:
    try:
        doc = _decode_yaml(data)
        return Lock.from_dict({} if doc is None else doc)
    except (yaml.YAMLError, ChartFieldError) as e:
        raise LockParseError(f"cannot load Chart.lock: {e}") from e


def _load_subchart(
    group: str,
    members: List[BufferedFile],
    ctx: Optional[LoadContext],
) -> Chart:
    if is_archive_group(group):
        return load_files(read_archive(members[0].data), ctx)

    # remove o prefixo `<grupo>/`; entradas soltas em charts/ não são charts
    buff: List[BufferedFile] = []
    for member in members:
        parts = member.name.split("/", 1)
        if len(parts) < 2:
            if ctx is not None:
                ctx.log(
                    chart=group,
                    level="debug",
                    message="subchart member dropped",
                    file=member.name,
                )
            continue
        buff.append(BufferedFile(name=parts[1], data=member.data))
    return load_files(buff, ctx)


def load_files(
    files: Sequence[BufferedFile],
    ctx: Optional[LoadContext] = None,
) -> Chart:
    """
    Monta um chart a partir de arquivos em memória.

    Args:
        files (Sequence[BufferedFile]): Arquivos do chart, em ordem.
        ctx (Optional[LoadContext]): Contexto opcional para eventos e warnings.

    Returns:
        Chart: Chart montado, com a árvore de dependências resolvida.

    Raises:
        MissingMetadataError: Se nenhum `Chart.yaml` estiver presente.
        MetadataParseError: Se `Chart.yaml` não puder ser decodificado.
        LockParseError: Se `Chart.lock` não puder ser decodificado.
        ValuesParseError: Se algum documento de `values.yaml` for inválido.
        ChartValidationError: Se a metadata violar regras estruturais
            (o chart parcial fica em `.chart`).
        SubchartUnpackError: Se qualquer subchart falhar.
    """
    chart = Chart()
    subcharts: Dict[str, List[BufferedFile]] = {}

    # não depende da posição de Chart.yaml na lista
    seen_metadata = 0
    metadata_doc: Optional[Dict[str, Any]] = None
    for f in files:
        chart.raw.append(ChartFile(name=f.name, data=f.data))
        if f.name == CHART_FILE:
            metadata_doc, chart.metadata = _parse_metadata(f.data, metadata_doc)
            seen_metadata += 1

    if chart.metadata is None:
        raise MissingMetadataError(f"{CHART_FILE} file is missing")

    if not chart.metadata.api_version:
        chart.metadata.api_version = DEFAULT_API_VERSION

    if ctx is not None and seen_metadata > 1:
        ctx.add_warning(
            chart=chart.name(),
            message=f"{seen_metadata} {CHART_FILE} entries found; later entries overlay earlier ones",
        )

    for f in files:
        outcome = classify(f.name)

        if outcome.kind is FileKind.METADATA:
            continue
        elif outcome.kind is FileKind.LOCK:
            chart.lock = _parse_lock(f.data)
        elif outcome.kind is FileKind.VALUES:
            try:
                chart.values = load_values(f.data)
            except ValuesError as e:
                raise ValuesParseError(f"cannot load values.yaml: {e}") from e
        elif outcome.kind is FileKind.SCHEMA:
            chart.schema = f.data
        elif outcome.kind is FileKind.TEMPLATE:
            chart.templates.append(ChartFile(name=f.name, data=f.data))
        elif outcome.kind is FileKind.SUBCHART:
            subcharts.setdefault(outcome.group, []).append(
                BufferedFile(name=outcome.member, data=f.data)
            )
        else:
            chart.files.append(ChartFile(name=f.name, data=f.data))

    violations = chart.validate()
    if violations:
        raise ChartValidationError(violations, chart=chart)

    for group, members in subcharts.items():
        if is_excluded_group(group):
            if ctx is not None:
                ctx.log(chart=chart.name(), level="info", message="subchart skipped", subchart=group)
            continue

        if is_archive_group(group) and members[0].name != group:
            raise SubchartNamingMismatchError(
                f"error unpacking subchart tar in {chart.name()}: "
                f"expected {group}, got {members[0].name}"
            )

        try:
            sub = _load_subchart(group, members, ctx)
        except LoadError as e:
            raise SubchartUnpackError(
                f"error unpacking subchart {group} in {chart.name()}: {e}",
                subchart=group,
                parent=chart.name(),
            ) from e

        chart.add_dependency(sub)

    if ctx is not None:
        ctx.log(
            chart=chart.name(),
            level="info",
            message="chart loaded",
            version=chart.metadata.version,
            templates=len(chart.templates),
            files=len(chart.files),
            dependencies=len(chart.dependencies),
            values_digest=compute_values_digest(chart.values),
        )

    return chart

from __future__ import annotations

import dataclasses
from typing import Any, Iterable, List, Mapping, TypeVar

T = TypeVar("T")


def _with_value(entry: T, value_field: str, value: float) -> T:
    if dataclasses.is_dataclass(entry) and not isinstance(entry, type):
        return dataclasses.replace(entry, **{value_field: value})
    if isinstance(entry, Mapping):
        out = dict(entry)
        out[value_field] = value
        return out  # type: ignore[return-value]
    raise TypeError(f"Entrada não suportada para acumulado: {type(entry)}")


def _get_value(entry: Any, value_field: str) -> float:
    if isinstance(entry, Mapping):
        return entry[value_field]
    if dataclasses.is_dataclass(entry) and not isinstance(entry, type):
        return getattr(entry, value_field)
    raise TypeError(f"Entrada não suportada para acumulado: {type(entry)}")


def accumulate(entries: Iterable[T], value_field: str = "rate_percent") -> List[T]:
    """
    Acumula (juros compostos) valores percentuais em ordem.

    Cada item devolvido é uma cópia do original com `value_field` trocado pelo
    fator acumulado até ali: 1 * (1 + v1/100) * (1 + v2/100) ...
    Ex.: [0.5, 0.5] -> [1.005, 1.010025]
    """
    out: List[T] = []
    running = 1.0
    for entry in entries:
        running *= 1 + _get_value(entry, value_field) / 100
        out.append(_with_value(entry, value_field, running))
    return out


def compound_index(rates: Iterable[float]) -> float:
    """Fator final do acumulado. Sequência vazia -> 1.0."""
    index = 1.0
    for rate in rates:
        index *= 1 + rate / 100
    return index

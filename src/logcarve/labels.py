"""Label selection and reordering."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


def project(labels: Sequence[str], values: Sequence[str], selected: Sequence[str]) -> tuple[list[str], list[str]]:
    """Restrict fields to ``selected``, in ``selected`` order.

    An empty selection keeps every field. Selected names the line does not
    have are dropped, so one selection can serve patterns that only partly
    share field names.
    """
    if not selected:
        return list(labels), list(values)
    out_labels: list[str] = []
    out_values: list[str] = []
    for name in selected:
        try:
            i = labels.index(name)
        except ValueError:
            continue
        out_labels.append(name)
        out_values.append(values[i])
    return out_labels, out_values

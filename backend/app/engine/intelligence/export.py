# engine/intelligence/export.py
"""Export CSV des résultats (en-tête fixe, une ligne par résultat)."""
from __future__ import annotations

from typing import Iterable, List
import csv
import io

from app.shared.enums import CANONICAL_ORDER, CATEGORY_LABELS

HEADERS: List[str] = (
    ["Nom", "Classe", "Date", "Âge", "Genre"]
    + [CATEGORY_LABELS[c] for c in CANONICAL_ORDER]
    + ["Type dominant"]
)


def _row(result) -> list:
    return (
        [result.name, result.group, result.date.date().isoformat(), int(result.age), result.gender]
        + [int(result.scores.get(c, 0)) for c in CANONICAL_ORDER]
        + [CATEGORY_LABELS[result.dominant_category]]
    )


def results_to_csv(results: Iterable) -> str:
    """Chaînes entre guillemets, nombres nus (QUOTE_NONNUMERIC)."""
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    writer.writerow(HEADERS)
    for result in results:
        writer.writerow(_row(result))
    return buf.getvalue()


def export_filename(today) -> str:
    return f"multiple-intelligence-results-{today.isoformat()}.csv"


__all__ = ["HEADERS", "results_to_csv", "export_filename"]

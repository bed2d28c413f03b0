"""Feature frequency tables and the combination heatmap matrix.

Two views over the same feature usage counts:

- the combination matrix: how often feature X and feature Y appear together
  in a winning strategy (symmetric, produced upstream, passed through here)
- per-slot rankings: how often feature X was chosen as feature #k
"""
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np
import pandas as pd

from datamine.model import FeatureSummary, ModelIntegrityError


@dataclass(frozen=True)
class RankedFeature:
    name: str
    frequency: float


@dataclass(frozen=True)
class RankedTable:
    """Features ordered by how often they were picked for one slot."""
    slot_index: int
    entries: Tuple[RankedFeature, ...]

    @property
    def title(self) -> str:
        return f"Feature {self.slot_index + 1}"


@dataclass(frozen=True)
class CombinationMatrix:
    """N x N co-occurrence ratios, rows and columns in feature order."""
    names: Tuple[str, ...]
    values: Tuple[Tuple[float, ...], ...]


def build_combination_matrix(summary: FeatureSummary) -> CombinationMatrix:
    """Return the upstream combination matrix after checking its shape."""
    names = tuple(f.name for f in summary.features)
    n = len(names)
    rows = summary.combinations
    if len(rows) != n or any(len(row) != n for row in rows):
        shape = (len(rows), sorted({len(row) for row in rows}))
        raise ModelIntegrityError(
            f"Combination matrix must be {n}x{n} to match the feature list, got {shape}"
        )
    matrix = np.asarray(rows, dtype=float).reshape(n, n)
    if not np.isfinite(matrix).all():
        raise ModelIntegrityError("Combination matrix contains non-finite values")
    return CombinationMatrix(names=names, values=rows)


def frequency_slot_count(summary: FeatureSummary) -> int:
    """Number of slots per feature; every feature must report the same count."""
    if not summary.features:
        return 0
    lengths = {len(f.frequencies) for f in summary.features}
    if len(lengths) > 1:
        detail = ', '.join(f"{f.name}={len(f.frequencies)}" for f in summary.features)
        raise ModelIntegrityError(f"Feature frequency lengths differ: {detail}")
    return lengths.pop()


def frequency_table(summary: FeatureSummary) -> pd.DataFrame:
    """Features x slots frame, columns 'Feature 1', 'Feature 2', ..."""
    slots = frequency_slot_count(summary)
    return pd.DataFrame(
        [list(f.frequencies) for f in summary.features],
        index=[f.name for f in summary.features],
        columns=[f"Feature {i + 1}" for i in range(slots)],
        dtype=float,
    )


def rank_by_slot(summary: FeatureSummary, slot_index: int) -> RankedTable:
    """Rank features by their frequency in one slot, highest first.

    Ties keep their order from the feature list.
    """
    table = frequency_table(summary)
    if not 0 <= slot_index < table.shape[1]:
        raise IndexError(f"Slot {slot_index} out of range (0..{table.shape[1] - 1})")
    column = table.iloc[:, slot_index].sort_values(ascending=False, kind='stable')
    entries = tuple(
        RankedFeature(name=str(name), frequency=float(value))
        for name, value in column.items()
    )
    return RankedTable(slot_index=slot_index, entries=entries)


def rank_all_slots(summary: FeatureSummary) -> List[RankedTable]:
    """One ranked table per slot."""
    return [rank_by_slot(summary, i) for i in range(frequency_slot_count(summary))]

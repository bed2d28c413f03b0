"""Per-strategy row sets for the data mining report.

The layout kind is chosen once per model: seasonality runs describe a
strategy by weekday and time of day, threshold runs by its two feature
conditions. Both layouts have the same number of primary rows so strategy
tables line up on the page.
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional

from datamine.model import ModelIntegrityError, ResultModel, Side, Strategy
from datamine.report.features import EMPTY_CELL, describe_feature_pair
from datamine.report.formatting import MetricFormatter

WEEKDAYS = ('Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday')
PRIMARY_ROW_COUNT = 6

_DIGITS = re.compile(r'\d+')


class LayoutKind(str, Enum):
    """Primary row set shape."""
    SEASONALITY = "seasonality"
    THRESHOLD = "threshold"


@dataclass(frozen=True)
class Cell:
    """One labelled value in a report table."""
    label: str
    value: str
    numeric: bool = False
    css_class: Optional[str] = None


BLANK_CELL = Cell(label='', value='')


def select_layout(model: ResultModel) -> LayoutKind:
    return LayoutKind.SEASONALITY if model.seasonality_mode else LayoutKind.THRESHOLD


def resolve_weekday(weekday: int) -> str:
    """1 -> 'Monday' ... 5 -> 'Friday'."""
    if type(weekday) is not int or not 1 <= weekday <= len(WEEKDAYS):
        raise ModelIntegrityError(f"Invalid weekday {weekday!r}, expected 1-5")
    return WEEKDAYS[weekday - 1]


def holding_time(exit_description: str) -> str:
    """First integer in the exit description, as hours: 'Hold 4h then exit' -> '4h'."""
    match = _DIGITS.search(exit_description)
    if match is None:
        raise ModelIntegrityError(f"No holding time in exit description {exit_description!r}")
    return f"{int(match.group())}h"


def options_text(strategy: Strategy, formatter: MetricFormatter) -> str:
    options = []
    if strategy.optimize_weekdays:
        options.append('Weekday optimization')
    if strategy.stop_loss is not None:
        options.append(f"Stop-loss at {formatter.stop_loss(strategy.stop_loss)}")
    if not options:
        return EMPTY_CELL
    return ', '.join(options)


def _side_cell(strategy: Strategy) -> Cell:
    css_class = 'short' if strategy.side is Side.SHORT else None
    return Cell(label='Side', value=strategy.side.label, css_class=css_class)


def _entry_time_cell(strategy: Strategy) -> Cell:
    return Cell(label='Entry time', value=strategy.time_of_day or EMPTY_CELL)


def _holding_time_cell(strategy: Strategy) -> Cell:
    return Cell(label='Holding time', value=holding_time(strategy.exit))


def seasonality_rows(strategy: Strategy, formatter: MetricFormatter) -> List[Cell]:
    weekday = resolve_weekday(strategy.weekday) if strategy.weekday is not None else EMPTY_CELL
    return [
        _side_cell(strategy),
        Cell(label='Weekday', value=weekday),
        _entry_time_cell(strategy),
        _holding_time_cell(strategy),
        BLANK_CELL,
        BLANK_CELL,
    ]


def threshold_rows(strategy: Strategy, formatter: MetricFormatter) -> List[Cell]:
    pair = describe_feature_pair(strategy.features[0], strategy.features[1], formatter)
    return [
        Cell(label='Feature 1', value=pair.first),
        Cell(label='Feature 2', value=pair.second),
        _side_cell(strategy),
        _entry_time_cell(strategy),
        _holding_time_cell(strategy),
        Cell(label='Options', value=options_text(strategy, formatter)),
    ]


ROW_BUILDERS: Dict[LayoutKind, Callable[[Strategy, MetricFormatter], List[Cell]]] = {
    LayoutKind.SEASONALITY: seasonality_rows,
    LayoutKind.THRESHOLD: threshold_rows,
}


def primary_rows(kind: LayoutKind, strategy: Strategy, formatter: MetricFormatter) -> List[Cell]:
    return ROW_BUILDERS[kind](strategy, formatter)


def secondary_rows(strategy: Strategy, formatter: MetricFormatter) -> List[Cell]:
    """Performance metrics, identical in every layout."""
    return [
        Cell(label='Returns', value=formatter.money(strategy.returns), numeric=True),
        Cell(label='RAR', value=formatter.ratio(strategy.risk_adjusted), numeric=True),
        Cell(label='MinRAR', value=formatter.ratio(strategy.risk_adjusted_min), numeric=True),
        Cell(label='RecRAR', value=formatter.ratio(strategy.risk_adjusted_recent), numeric=True),
        Cell(label='Max Drawdown', value=formatter.percentage(strategy.max_drawdown), numeric=True),
        Cell(label='Days Traded', value=formatter.percentage(strategy.trades_ratio), numeric=True),
    ]

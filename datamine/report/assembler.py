"""Builds the structured data mining report from a ResultModel.

The report is an ordered tuple of sections: run parameters (when the engine
echoed any), the feature heatmap and per-slot rankings (feature-analysis
runs only), then one section per asset in model order. Every strategy
becomes a row group titled '<symbol> Strategy #<n>'.
"""
from dataclasses import dataclass, field
from functools import partial
from typing import Callable, Iterator, List, Optional, Tuple, Union

from loguru import logger

from datamine.config import ReportConfig, DEFAULT_CONFIG
from datamine.model import AssetResult, ResultModel, RunParameters, Strategy
from datamine.report.detail_view import DetailViewDescriptor, open_detail
from datamine.report.features import EMPTY_CELL
from datamine.report.formatting import MetricFormatter
from datamine.report.frequency import (
    CombinationMatrix, RankedTable, build_combination_matrix, rank_all_slots,
)
from datamine.report.layout import Cell, LayoutKind, primary_rows, secondary_rows, select_layout


@dataclass(frozen=True)
class RowGroup:
    """Everything shown for one strategy."""
    title: str
    primary: Tuple[Cell, ...]
    secondary: Tuple[Cell, ...]
    equity_curve: str
    weekday_plot: str
    strategy: Strategy = field(repr=False)
    on_select: Callable[[], DetailViewDescriptor] = field(repr=False, compare=False, default=None)

    @property
    def rows(self) -> List[Tuple[Cell, Cell]]:
        """Primary and secondary cells paired up, one tuple per table row."""
        return list(zip(self.primary, self.secondary))

    def open_detail(self) -> DetailViewDescriptor:
        return self.on_select()


@dataclass(frozen=True)
class AssetSection:
    symbol: str
    groups: Tuple[RowGroup, ...]
    plot: Optional[str] = None

    @property
    def title(self) -> str:
        return f"{self.symbol} ({len(self.groups)} Strategies)"


@dataclass(frozen=True)
class HeatmapSection:
    matrix: CombinationMatrix
    title: str = 'Feature Combinations'


@dataclass(frozen=True)
class RankingSection:
    table: RankedTable

    @property
    def title(self) -> str:
        return self.table.title


@dataclass(frozen=True)
class ParametersSection:
    cells: Tuple[Cell, ...]
    title: str = 'Parameters'


Section = Union[ParametersSection, HeatmapSection, RankingSection, AssetSection]


@dataclass(frozen=True)
class Report:
    layout: LayoutKind
    sections: Tuple[Section, ...]

    def _of_type(self, kind) -> list:
        return [s for s in self.sections if isinstance(s, kind)]

    @property
    def assets(self) -> List[AssetSection]:
        return self._of_type(AssetSection)

    @property
    def heatmap(self) -> Optional[HeatmapSection]:
        found = self._of_type(HeatmapSection)
        return found[0] if found else None

    @property
    def rankings(self) -> List[RankingSection]:
        return self._of_type(RankingSection)

    @property
    def parameters(self) -> Optional[ParametersSection]:
        found = self._of_type(ParametersSection)
        return found[0] if found else None

    def row_groups(self) -> Iterator[RowGroup]:
        for asset in self.assets:
            yield from asset.groups


def strategy_title(symbol: str, index: int) -> str:
    """1-based strategy heading."""
    return f"{symbol} Strategy #{index}"


def build_row_group(
    symbol: str,
    index: int,
    strategy: Strategy,
    layout: LayoutKind,
    formatter: MetricFormatter,
    config: ReportConfig = DEFAULT_CONFIG,
) -> RowGroup:
    title = strategy_title(symbol, index)
    return RowGroup(
        title=title,
        primary=tuple(primary_rows(layout, strategy, formatter)),
        secondary=tuple(secondary_rows(strategy, formatter)),
        equity_curve=strategy.plot,
        weekday_plot=strategy.weekday_plot,
        strategy=strategy,
        on_select=partial(open_detail, strategy, title, config.detail_view),
    )


def build_asset_section(
    asset: AssetResult,
    layout: LayoutKind,
    formatter: MetricFormatter,
    config: ReportConfig = DEFAULT_CONFIG,
) -> AssetSection:
    groups = tuple(
        build_row_group(asset.symbol, i + 1, strategy, layout, formatter, config)
        for i, strategy in enumerate(asset.strategies)
    )
    logger.debug(f"{asset.symbol}: {len(groups)} strategies")
    return AssetSection(symbol=asset.symbol, groups=groups, plot=asset.plot)


def build_parameters_section(
    parameters: RunParameters,
    formatter: MetricFormatter,
) -> Optional[ParametersSection]:
    if parameters == RunParameters():
        return None
    thresholds = parameters.thresholds
    cells = (
        Cell(label='From', value=parameters.date_min or EMPTY_CELL),
        Cell(label='To', value=parameters.date_max or EMPTY_CELL),
        Cell(label='Time min', value=parameters.time_min or EMPTY_CELL),
        Cell(label='Time max', value=parameters.time_max or EMPTY_CELL),
        Cell(label='Weekday optimization', value='Yes' if parameters.optimize_weekdays else 'No'),
        Cell(label='Threshold range',
             value=formatter.round_value(thresholds.range) if thresholds else EMPTY_CELL,
             numeric=True),
        Cell(label='Threshold increment',
             value=formatter.round_value(thresholds.increment) if thresholds else EMPTY_CELL,
             numeric=True),
    )
    return ParametersSection(cells=cells)


def build_report(model: ResultModel, config: ReportConfig = DEFAULT_CONFIG) -> Report:
    """Transform a result model into the ordered report tree.

    Raises ModelIntegrityError on corrupt input; no partial report is
    returned in that case.
    """
    layout = select_layout(model)
    formatter = MetricFormatter(config.formatting)
    logger.info(
        f"Building {layout.value} report: {len(model.assets)} assets, "
        f"{model.strategy_count} strategies"
    )

    sections: List[Section] = []

    parameters = build_parameters_section(model.parameters, formatter)
    if parameters is not None:
        sections.append(parameters)

    if model.features is not None:
        sections.append(HeatmapSection(matrix=build_combination_matrix(model.features)))
        sections.extend(RankingSection(table=t) for t in rank_all_slots(model.features))

    for asset in model.assets:
        sections.append(build_asset_section(asset, layout, formatter, config))

    return Report(layout=layout, sections=tuple(sections))

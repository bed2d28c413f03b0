"""Feature validation report for a single archive.

Shows the archive's daily records plot and, per feature, the share of
missing values and the basic distribution statistics next to its histogram.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

from loguru import logger

from datamine.config import ReportConfig, DEFAULT_CONFIG
from datamine.model import FeatureStats, ValidationModel
from datamine.report.formatting import MetricFormatter
from datamine.report.layout import Cell

WARNING_CLASS = 'warning'


@dataclass(frozen=True)
class FeatureStatsSection:
    name: str
    cells: Tuple[Cell, ...]
    plot: str

    @property
    def has_warning(self) -> bool:
        return any(c.css_class == WARNING_CLASS for c in self.cells)


@dataclass(frozen=True)
class ValidationReport:
    symbol: str
    plot: str
    features: Tuple[FeatureStatsSection, ...]


def build_feature_section(
    stats: FeatureStats,
    formatter: MetricFormatter,
    config: ReportConfig = DEFAULT_CONFIG,
) -> FeatureStatsSection:
    missing_class: Optional[str] = None
    if stats.nil_ratio >= config.validation.missing_value_warning:
        missing_class = WARNING_CLASS
    cells = (
        Cell(label='Property', value=stats.name),
        Cell(label='Missing Values', value=formatter.percentage(stats.nil_ratio),
             numeric=True, css_class=missing_class),
        Cell(label='Minimum', value=formatter.round_value(stats.min), numeric=True),
        Cell(label='Maximum', value=formatter.round_value(stats.max), numeric=True),
        Cell(label='Mean', value=formatter.round_value(stats.mean), numeric=True),
        Cell(label='Standard Deviation', value=formatter.round_value(stats.std_dev), numeric=True),
    )
    return FeatureStatsSection(name=stats.name, cells=cells, plot=stats.plot)


def build_validation_report(model: ValidationModel, config: ReportConfig = DEFAULT_CONFIG) -> ValidationReport:
    formatter = MetricFormatter(config.formatting)
    features = tuple(build_feature_section(f, formatter, config) for f in model.features)
    flagged = [f.name for f in features if f.has_warning]
    logger.info(f"Building validation report for {model.symbol}: {len(features)} features")
    if flagged:
        logger.warning(f"{model.symbol}: high missing value ratio in {', '.join(flagged)}")
    return ValidationReport(symbol=model.symbol, plot=model.plot, features=features)

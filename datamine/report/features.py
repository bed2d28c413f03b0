"""Human-readable descriptors for a strategy's feature thresholds."""
from dataclasses import dataclass

from datamine.model import FeatureThreshold
from datamine.report.formatting import MetricFormatter

EMPTY_CELL = '-'


@dataclass(frozen=True)
class FeaturePairDescriptor:
    first: str
    second: str


def describe_feature(threshold: FeatureThreshold, formatter: MetricFormatter = None) -> str:
    """'<symbol>.<name> (<min>, <max>)' with thresholds rounded to 2 digits."""
    formatter = formatter or MetricFormatter()
    low = formatter.threshold(threshold.min)
    high = formatter.threshold(threshold.max)
    return f"{threshold.symbol}.{threshold.name} ({low}, {high})"


def describe_feature_pair(
    first: FeatureThreshold,
    second: FeatureThreshold,
    formatter: MetricFormatter = None,
) -> FeaturePairDescriptor:
    """Describe both features, collapsing the second to '-' when it reads the same.

    The comparison is on the rendered text, so two raw thresholds that only
    differ below display precision count as the same feature.
    """
    formatter = formatter or MetricFormatter()
    first_text = describe_feature(first, formatter)
    second_text = describe_feature(second, formatter)
    if second_text == first_text:
        second_text = EMPTY_CELL
    return FeaturePairDescriptor(first=first_text, second=second_text)

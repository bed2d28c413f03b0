"""
Report Configuration - Precision, geometry and threshold constants.

Instances are immutable once built and are passed explicitly to the
formatting and assembly functions; nothing here is process-wide state.
"""
from dataclasses import dataclass, field, fields, replace
from typing import Dict, Any


@dataclass(frozen=True)
class FormattingConfig:
    """Metric formatting precision."""
    currency_symbol: str = '$'
    percentage_precision: int = 2
    ratio_precision: int = 3       # RAR / MinRAR / RecRAR
    stop_loss_precision: int = 1
    threshold_precision: int = 2   # Feature threshold display
    round_precision: int = 3       # roundValue for non-integers


@dataclass(frozen=True)
class DetailViewConfig:
    """Detail window geometry (pixels)."""
    equity_curve_width: int = 1152
    equity_curve_height: int = 768
    weekday_plot_width: int = 432
    weekday_plot_height: int = 288
    padding: int = 35
    left: int = 100
    top: int = 100


@dataclass(frozen=True)
class ValidationConfig:
    """Feature validation report thresholds."""
    missing_value_warning: float = 0.1  # nilRatio at or above this is flagged


@dataclass(frozen=True)
class ReportConfig:
    """Master report configuration."""
    formatting: FormattingConfig = field(default_factory=FormattingConfig)
    detail_view: DetailViewConfig = field(default_factory=DetailViewConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'formatting': {
                'currency_symbol': self.formatting.currency_symbol,
                'percentage_precision': self.formatting.percentage_precision,
                'ratio_precision': self.formatting.ratio_precision,
                'stop_loss_precision': self.formatting.stop_loss_precision,
                'threshold_precision': self.formatting.threshold_precision,
                'round_precision': self.formatting.round_precision,
            },
            'detail_view': {
                'equity_curve_width': self.detail_view.equity_curve_width,
                'equity_curve_height': self.detail_view.equity_curve_height,
                'weekday_plot_width': self.detail_view.weekday_plot_width,
                'weekday_plot_height': self.detail_view.weekday_plot_height,
                'padding': self.detail_view.padding,
                'left': self.detail_view.left,
                'top': self.detail_view.top,
            },
            'validation': {
                'missing_value_warning': self.validation.missing_value_warning,
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ReportConfig':
        """Create from dictionary. Unknown keys are ignored."""
        config = cls()
        for name in ('formatting', 'detail_view', 'validation'):
            if name not in data:
                continue
            section = getattr(config, name)
            known = {f.name for f in fields(section)}
            overrides = {k: v for k, v in data[name].items() if k in known}
            config = replace(config, **{name: replace(section, **overrides)})
        return config


DEFAULT_CONFIG = ReportConfig()

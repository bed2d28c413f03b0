"""Detail view descriptors for a single strategy.

Selecting a strategy in the report opens a separate view with its equity
curve and both weekday return plots. This module only describes that view;
the host that owns windows decides how to show it. Each descriptor is built
from scratch per request and shares nothing with the report it came from.
"""
from dataclasses import dataclass
from typing import Dict, Any, Optional, Tuple

from datamine.config import DetailViewConfig
from datamine.model import Strategy


@dataclass(frozen=True)
class DetailPlot:
    """One image slot. ``src`` is None for an empty slot."""
    caption: str
    src: Optional[str]
    width: int
    height: int

    @property
    def is_empty(self) -> bool:
        return not self.src


@dataclass(frozen=True)
class DetailViewDescriptor:
    title: str
    equity_curve: DetailPlot
    weekday_plot: DetailPlot
    recent_plot: DetailPlot
    width: int
    height: int
    left: int
    top: int

    @property
    def plots(self) -> Tuple[DetailPlot, DetailPlot, DetailPlot]:
        return (self.equity_curve, self.weekday_plot, self.recent_plot)

    @property
    def window_features(self) -> str:
        """Feature string for window.open()."""
        return (f"width={self.width},height={self.height},"
                f"left={self.left},top={self.top},resizable=yes")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'title': self.title,
            'plots': [
                {'caption': p.caption, 'src': p.src, 'width': p.width, 'height': p.height}
                for p in self.plots
            ],
            'width': self.width,
            'height': self.height,
            'left': self.left,
            'top': self.top,
            'features': self.window_features,
        }


def open_detail(strategy: Strategy, title: str, config: DetailViewConfig = None) -> DetailViewDescriptor:
    """Package the strategy's three plot references for a detail view.

    The references are passed through untouched. A missing recent plot
    becomes an empty slot.
    """
    config = config or DetailViewConfig()
    equity_curve = DetailPlot(
        caption='Equity Curve',
        src=strategy.plot or None,
        width=config.equity_curve_width,
        height=config.equity_curve_height,
    )
    weekday_plot = DetailPlot(
        caption='Returns by Weekday (All)',
        src=strategy.weekday_plot or None,
        width=config.weekday_plot_width,
        height=config.weekday_plot_height,
    )
    recent_plot = DetailPlot(
        caption='Returns by Weekday (Recent)',
        src=strategy.recent_plot or None,
        width=config.weekday_plot_width,
        height=config.weekday_plot_height,
    )
    # Equity curve on top, the two weekday plots side by side below it
    width = max(equity_curve.width, weekday_plot.width + recent_plot.width) + config.padding
    height = equity_curve.height + weekday_plot.height + config.padding
    return DetailViewDescriptor(
        title=f"{title} - Details",
        equity_curve=equity_curve,
        weekday_plot=weekday_plot,
        recent_plot=recent_plot,
        width=width,
        height=height,
        left=config.left,
        top=config.top,
    )

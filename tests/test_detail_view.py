"""Detail view dispatcher tests."""
import json

from datamine.config import DetailViewConfig
from datamine.model import Strategy
from datamine.report.detail_view import open_detail


def test_selects_the_strategy_plots(strategy_dict):
    strategy = Strategy.from_dict(strategy_dict())
    detail = open_detail(strategy, 'ES Strategy #1')
    assert detail.title == 'ES Strategy #1 - Details'
    assert [p.src for p in detail.plots] == [
        'file:///tmp/ES.strategy01.png',
        'file:///tmp/ES.strategy01.weekday.png',
        'file:///tmp/ES.strategy01.weekday.recent.png',
    ]
    assert not any(p.is_empty for p in detail.plots)


def test_missing_recent_plot_is_an_empty_slot(strategy_dict):
    data = strategy_dict()
    del data['recentPlot']
    detail = open_detail(Strategy.from_dict(data), 'ES Strategy #1')
    assert detail.recent_plot.is_empty
    assert detail.recent_plot.src is None
    assert detail.recent_plot.caption == 'Returns by Weekday (Recent)'
    assert not detail.equity_curve.is_empty


def test_window_geometry():
    config = DetailViewConfig()
    strategy = Strategy.from_dict({
        'side': 0, 'features': [
            {'symbol': 'ES', 'name': 'a', 'min': 0, 'max': 1},
            {'symbol': 'ES', 'name': 'b', 'min': 0, 'max': 1},
        ],
        'exit': '24h', 'returns': 0, 'riskAdjusted': 0, 'riskAdjustedMin': 0,
        'riskAdjustedRecent': 0, 'maxDrawdown': 0, 'tradesRatio': 0,
    })
    detail = open_detail(strategy, 'x', config)
    assert detail.width == 1152 + 35
    assert detail.height == 768 + 288 + 35
    assert detail.window_features == 'width=1187,height=1091,left=100,top=100,resizable=yes'
    assert all(p.is_empty for p in detail.plots)


def test_independent_descriptors(strategy_dict):
    first = Strategy.from_dict(strategy_dict())
    second = Strategy.from_dict(strategy_dict(plot='file:///tmp/NQ.strategy01.png'))
    a = open_detail(first, 'ES Strategy #1')
    b = open_detail(second, 'NQ Strategy #1')
    again = open_detail(first, 'ES Strategy #1')
    assert a.equity_curve.src != b.equity_curve.src
    assert a == again
    assert a is not again


def test_to_dict_is_json_serializable(strategy_dict):
    detail = open_detail(Strategy.from_dict(strategy_dict(recentPlot=None)), 'ES Strategy #2')
    data = json.loads(json.dumps(detail.to_dict()))
    assert data['title'] == 'ES Strategy #2 - Details'
    assert len(data['plots']) == 3
    assert data['plots'][2]['src'] is None
    assert data['features'].startswith('width=')

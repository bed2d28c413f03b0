"""Shared model fixtures in the analytics engine's JSON shape."""
import copy

import pytest


def _feature(symbol='ES', name='Momentum8', low=1.001, high=2.001):
    return {'symbol': symbol, 'name': name, 'min': low, 'max': high}


STRATEGY = {
    'side': 0,
    'optimizeWeekdays': False,
    'timeOfDay': '14:00',
    'features': [
        _feature('ES', 'Momentum8', -0.5, 0.25),
        _feature('NQ', 'Momentum24', 0.1, 0.35),
    ],
    'exit': 'Hold 24h',
    'returns': 150.5,
    'riskAdjusted': 1.2345,
    'riskAdjustedMin': 0.8,
    'riskAdjustedRecent': -0.0001,
    'maxDrawdown': 0.1,
    'tradesRatio': 0.75,
    'plot': 'file:///tmp/ES.strategy01.png',
    'weekdayPlot': 'file:///tmp/ES.strategy01.weekday.png',
    'recentPlot': 'file:///tmp/ES.strategy01.weekday.recent.png',
}


@pytest.fixture
def feature():
    return _feature


@pytest.fixture
def strategy_dict():
    """Factory for strategy dicts with overrides."""
    def make(**overrides):
        data = copy.deepcopy(STRATEGY)
        data.update(overrides)
        return data
    return make


@pytest.fixture
def feature_summary_dict():
    return {
        'features': [
            {'name': 'Momentum8', 'frequencies': [0.2, 0.5]},
            {'name': 'Momentum24', 'frequencies': [0.5, 0.3]},
            {'name': 'Returns48', 'frequencies': [0.3, 0.2]},
        ],
        'combinations': [
            [0.1, 0.2, 0.05],
            [0.2, 0.0, 0.15],
            [0.05, 0.15, 0.1],
        ],
    }


@pytest.fixture
def model_dict(strategy_dict, feature_summary_dict):
    """Two assets, threshold mode, with feature analysis and run parameters."""
    return {
        'dateMin': '2020-01-01',
        'dateMax': '2024-06-30',
        'timeMin': '09:00',
        'timeMax': '15:00',
        'optimizeWeeks': True,
        'thresholds': {'range': 0.5, 'increment': 0.05},
        'seasonalityMode': False,
        'results': [
            {
                'symbol': 'ES',
                'plot': 'file:///tmp/ES.daily.png',
                'strategies': [
                    strategy_dict(),
                    strategy_dict(side=1, optimizeWeekdays=True, stopLoss=0.025, timeOfDay=None),
                ],
            },
            {
                'symbol': 'NQ',
                'plot': 'file:///tmp/NQ.daily.png',
                'strategies': [strategy_dict(exit='Returns72 (72h)')],
            },
        ],
        'features': feature_summary_dict,
    }


@pytest.fixture
def validation_dict():
    return {
        'symbol': 'ES',
        'plot': 'file:///tmp/daily.png',
        'features': [
            {
                'name': 'Momentum8', 'plot': 'file:///tmp/Momentum8.png',
                'nilRatio': 0.02, 'min': -0.0001, 'max': 3, 'mean': 0.01234, 'stdDev': 0.5,
            },
            {
                'name': 'Returns72', 'plot': 'file:///tmp/Returns72.png',
                'nilRatio': 0.1, 'min': -12.5, 'max': 14.25, 'mean': 0.0, 'stdDev': 2.71828,
            },
        ],
    }

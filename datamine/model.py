"""
Result Model - Read-only view of the analytics engine's data mining output.

The engine serializes its results as one JSON document with camelCase keys.
Everything here is parsed once per render and never mutated afterwards.
"""
import json
import math
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import Dict, Any, Optional, Tuple, Union

from loguru import logger


class ModelIntegrityError(ValueError):
    """The upstream model is structurally corrupt and cannot be rendered."""


class Side(IntEnum):
    """Directional bias of a strategy."""
    LONG = 0
    SHORT = 1

    @property
    def label(self) -> str:
        return 'Long' if self is Side.LONG else 'Short'


def _require(data: Dict[str, Any], key: str, where: str) -> Any:
    if not isinstance(data, dict):
        raise ModelIntegrityError(f"Expected an object for {where}, got {type(data).__name__}")
    if key not in data:
        raise ModelIntegrityError(f"Missing field '{key}' in {where}")
    return data[key]


def _to_float(value: Any, what: str, where: str) -> float:
    if isinstance(value, bool):
        raise ModelIntegrityError(f"Invalid {what} {value!r} in {where}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ModelIntegrityError(f"Invalid {what} {value!r} in {where}") from None
    if not math.isfinite(number):
        raise ModelIntegrityError(f"Non-finite {what} {value!r} in {where}")
    return number


def _require_float(data: Dict[str, Any], key: str, where: str) -> float:
    return _to_float(_require(data, key, where), key, where)


def _optional_float(data: Dict[str, Any], key: str, where: str) -> Optional[float]:
    value = data.get(key)
    return _to_float(value, key, where) if value is not None else None


def _optional_int(data: Dict[str, Any], key: str, where: str) -> Optional[int]:
    # JSON integers only; 2.7 or true must not pass as a weekday
    value = data.get(key)
    if value is not None and type(value) is not int:
        raise ModelIntegrityError(f"Invalid {key} {value!r} in {where}")
    return value


def _sequence(value: Any, what: str, where: str) -> list:
    """Optional JSON array field; absent or null reads as empty."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise ModelIntegrityError(f"Expected a list of {what} in {where}, got {value!r}")
    return value


@dataclass(frozen=True)
class FeatureThreshold:
    """Numeric range on a named signal used as an entry condition."""
    symbol: str
    name: str
    min: float
    max: float

    @classmethod
    def from_dict(cls, data: Dict[str, Any], where: str = 'feature') -> 'FeatureThreshold':
        return cls(
            symbol=str(_require(data, 'symbol', where)),
            name=str(_require(data, 'name', where)),
            min=_require_float(data, 'min', where),
            max=_require_float(data, 'max', where),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {'symbol': self.symbol, 'name': self.name, 'min': self.min, 'max': self.max}


@dataclass(frozen=True)
class Strategy:
    """One parameterized trading rule with its pre-computed backtest metrics."""
    side: Side
    features: Tuple[FeatureThreshold, FeatureThreshold]
    exit: str
    returns: float
    risk_adjusted: float
    risk_adjusted_min: float
    risk_adjusted_recent: float
    max_drawdown: float
    trades_ratio: float
    plot: str = ''
    weekday_plot: str = ''
    recent_plot: Optional[str] = None
    time_of_day: Optional[str] = None
    weekday: Optional[int] = None  # 1 = Monday ... 5 = Friday
    optimize_weekdays: bool = False
    stop_loss: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], where: str = 'strategy') -> 'Strategy':
        raw_side = _require(data, 'side', where)
        if type(raw_side) is not int:
            raise ModelIntegrityError(f"Invalid side {raw_side!r} in {where}")
        try:
            side = Side(raw_side)
        except ValueError:
            raise ModelIntegrityError(f"Invalid side {raw_side!r} in {where}") from None

        raw_features = _require(data, 'features', where)
        if not isinstance(raw_features, list):
            raise ModelIntegrityError(f"Expected a list of features in {where}")
        if len(raw_features) != 2:
            raise ModelIntegrityError(
                f"Expected 2 features in {where}, got {len(raw_features)}"
            )
        features = tuple(
            FeatureThreshold.from_dict(f, f"{where} feature {i + 1}")
            for i, f in enumerate(raw_features)
        )

        return cls(
            side=side,
            features=features,
            exit=str(_require(data, 'exit', where)),
            returns=_require_float(data, 'returns', where),
            risk_adjusted=_require_float(data, 'riskAdjusted', where),
            risk_adjusted_min=_require_float(data, 'riskAdjustedMin', where),
            risk_adjusted_recent=_require_float(data, 'riskAdjustedRecent', where),
            max_drawdown=_require_float(data, 'maxDrawdown', where),
            trades_ratio=_require_float(data, 'tradesRatio', where),
            plot=data.get('plot') or '',
            weekday_plot=data.get('weekdayPlot') or '',
            recent_plot=data.get('recentPlot') or None,
            time_of_day=data.get('timeOfDay'),
            weekday=_optional_int(data, 'weekday', where),
            optimize_weekdays=bool(data.get('optimizeWeekdays', False)),
            stop_loss=_optional_float(data, 'stopLoss', where),
        )


@dataclass(frozen=True)
class AssetResult:
    """All strategies found for one asset, in presentation order."""
    symbol: str
    strategies: Tuple[Strategy, ...] = ()
    plot: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AssetResult':
        symbol = str(_require(data, 'symbol', 'asset'))
        strategies = tuple(
            Strategy.from_dict(s, f"{symbol} strategy #{i + 1}")
            for i, s in enumerate(_sequence(data.get('strategies'), 'strategies', symbol))
        )
        return cls(symbol=symbol, strategies=strategies, plot=data.get('plot') or None)


@dataclass(frozen=True)
class FeatureFrequency:
    """How often a feature was picked for each slot (feature #1, feature #2, ...)."""
    name: str
    frequencies: Tuple[float, ...]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FeatureFrequency':
        name = str(_require(data, 'name', 'feature frequency'))
        where = f"feature frequency '{name}'"
        return cls(
            name=name,
            frequencies=tuple(
                _to_float(f, 'frequency', where)
                for f in _sequence(data.get('frequencies'), 'frequencies', where)
            ),
        )


@dataclass(frozen=True)
class FeatureSummary:
    """Feature usage statistics, only present in feature-analysis mode."""
    features: Tuple[FeatureFrequency, ...]
    combinations: Tuple[Tuple[float, ...], ...]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FeatureSummary':
        if not isinstance(data, dict):
            raise ModelIntegrityError(f"Expected an object for feature summary, got {data!r}")
        return cls(
            features=tuple(
                FeatureFrequency.from_dict(f)
                for f in _sequence(data.get('features'), 'feature frequencies', 'feature summary')
            ),
            combinations=tuple(
                tuple(
                    _to_float(v, 'combination', f"combinations row {i + 1}")
                    for v in _sequence(row, 'values', f"combinations row {i + 1}")
                )
                for i, row in enumerate(
                    _sequence(data.get('combinations'), 'rows', 'feature combinations')
                )
            ),
        )


@dataclass(frozen=True)
class Thresholds:
    """Threshold search grid used by the miner."""
    range: float
    increment: float


@dataclass(frozen=True)
class RunParameters:
    """Data mining run settings echoed back by the engine."""
    date_min: Optional[str] = None
    date_max: Optional[str] = None
    time_min: Optional[str] = None
    time_max: Optional[str] = None
    optimize_weekdays: bool = False
    thresholds: Optional[Thresholds] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RunParameters':
        thresholds = data.get('thresholds')
        if thresholds and not isinstance(thresholds, dict):
            raise ModelIntegrityError(f"Expected an object for thresholds, got {thresholds!r}")
        return cls(
            date_min=data.get('dateMin'),
            date_max=data.get('dateMax'),
            time_min=data.get('timeMin'),
            time_max=data.get('timeMax'),
            optimize_weekdays=bool(data.get('optimizeWeeks', False)),
            thresholds=Thresholds(
                range=_to_float(thresholds.get('range', 0.0), 'range', 'thresholds'),
                increment=_to_float(thresholds.get('increment', 0.0), 'increment', 'thresholds'),
            ) if thresholds else None,
        )


@dataclass(frozen=True)
class ResultModel:
    """Top-level report input."""
    assets: Tuple[AssetResult, ...]
    features: Optional[FeatureSummary] = None
    seasonality_mode: bool = False
    parameters: RunParameters = field(default_factory=RunParameters)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ResultModel':
        raw_assets = data.get('assets')
        if raw_assets is None:
            raw_assets = data.get('results')
        features = data.get('features')
        return cls(
            assets=tuple(AssetResult.from_dict(a) for a in _sequence(raw_assets, 'assets', 'model')),
            features=FeatureSummary.from_dict(features) if features else None,
            seasonality_mode=bool(data.get('seasonalityMode', False)),
            parameters=RunParameters.from_dict(data),
        )

    @property
    def strategy_count(self) -> int:
        return sum(len(a.strategies) for a in self.assets)


@dataclass(frozen=True)
class FeatureStats:
    """Distribution summary of one feature in an archive."""
    name: str
    nil_ratio: float
    min: float
    max: float
    mean: float
    std_dev: float
    plot: str = ''

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FeatureStats':
        name = str(_require(data, 'name', 'feature stats'))
        where = f"feature stats '{name}'"
        return cls(
            name=name,
            nil_ratio=_require_float(data, 'nilRatio', where),
            min=_require_float(data, 'min', where),
            max=_require_float(data, 'max', where),
            mean=_require_float(data, 'mean', where),
            std_dev=_require_float(data, 'stdDev', where),
            plot=data.get('plot') or '',
        )


@dataclass(frozen=True)
class ValidationModel:
    """Archive validation output: daily records plot plus per-feature stats."""
    symbol: str
    plot: str
    features: Tuple[FeatureStats, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ValidationModel':
        return cls(
            symbol=str(_require(data, 'symbol', 'validation model')),
            plot=data.get('plot') or '',
            features=tuple(
                FeatureStats.from_dict(f)
                for f in _sequence(data.get('features'), 'feature stats', 'validation model')
            ),
        )


def load_model_json(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a model JSON document produced by the analytics engine."""
    path = Path(path)
    logger.debug(f"Loading model from {path}")
    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ModelIntegrityError(f"Model {path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ModelIntegrityError(f"Model root in {path} must be an object")
    return data


def load_result_model(path: Union[str, Path]) -> ResultModel:
    return ResultModel.from_dict(load_model_json(path))


def load_validation_model(path: Union[str, Path]) -> ValidationModel:
    return ValidationModel.from_dict(load_model_json(path))

"""Report configuration tests."""
from datamine.config import ReportConfig


def test_round_trip():
    config = ReportConfig.from_dict({
        'formatting': {'ratio_precision': 4},
        'detail_view': {'padding': 10},
    })
    assert ReportConfig.from_dict(config.to_dict()) == config


def test_unknown_keys_ignored():
    config = ReportConfig.from_dict({
        'formatting': {'ratio_precision': 2, 'locale': 'de_DE'},
        'unknown_section': {},
    })
    assert config.formatting.ratio_precision == 2
    assert config.formatting.percentage_precision == 2


def test_defaults():
    config = ReportConfig()
    assert config.formatting.currency_symbol == '$'
    assert config.detail_view.equity_curve_width == 1152
    assert config.validation.missing_value_warning == 0.1

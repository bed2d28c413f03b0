"""Feature validation report tests."""
from datamine.config import ReportConfig
from datamine.model import ValidationModel
from datamine.report.validation import build_validation_report


def _values(section):
    return {c.label: c.value for c in section.cells}


def test_feature_rows(validation_dict):
    report = build_validation_report(ValidationModel.from_dict(validation_dict))
    assert report.symbol == 'ES'
    assert report.plot == 'file:///tmp/daily.png'

    first = report.features[0]
    assert [c.label for c in first.cells] == [
        'Property', 'Missing Values', 'Minimum', 'Maximum', 'Mean', 'Standard Deviation',
    ]
    assert _values(first) == {
        'Property': 'Momentum8',
        'Missing Values': '2.00%',
        'Minimum': '0',
        'Maximum': '3',
        'Mean': '0.012',
        'Standard Deviation': '0.500',
    }
    assert first.plot == 'file:///tmp/Momentum8.png'


def test_missing_value_warning_threshold(validation_dict):
    report = build_validation_report(ValidationModel.from_dict(validation_dict))
    assert not report.features[0].has_warning
    assert report.features[1].has_warning
    missing = report.features[1].cells[1]
    assert missing.css_class == 'warning'
    assert missing.value == '10.00%'


def test_warning_threshold_is_configurable(validation_dict):
    config = ReportConfig.from_dict({'validation': {'missing_value_warning': 0.5}})
    report = build_validation_report(ValidationModel.from_dict(validation_dict), config)
    assert not any(f.has_warning for f in report.features)


def test_statistics_rounding(validation_dict):
    second = build_validation_report(ValidationModel.from_dict(validation_dict)).features[1]
    values = _values(second)
    assert values['Minimum'] == '-12.500'
    assert values['Mean'] == '0'
    assert values['Standard Deviation'] == '2.718'

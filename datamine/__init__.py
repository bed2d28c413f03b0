"""
Data Mining Report

Turns the analytics engine's data mining results into structured reports:
1. Metric formatting
2. Feature descriptors
3. Feature frequency rankings and combination heatmap
4. Per-strategy row layouts
5. Report assembly
6. Strategy detail views
"""
from datamine.config import ReportConfig
from datamine.model import ModelIntegrityError, ResultModel, ValidationModel
from datamine.report.assembler import Report, build_report
from datamine.report.detail_view import DetailViewDescriptor, open_detail
from datamine.report.validation import build_validation_report

__all__ = [
    'ReportConfig', 'ModelIntegrityError', 'ResultModel', 'ValidationModel',
    'Report', 'build_report', 'DetailViewDescriptor', 'open_detail',
    'build_validation_report',
]

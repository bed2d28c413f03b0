"""Report package: model -> report tree -> HTML."""
from datamine.report.assembler import build_report
from datamine.report.html_builder import build_report_html, build_validation_html
from datamine.report.validation import build_validation_report

__all__ = ['build_report', 'build_report_html', 'build_validation_html', 'build_validation_report']

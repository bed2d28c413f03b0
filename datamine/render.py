"""
Report Rendering - Model JSON in, HTML file out.

Delegates to datamine.report for the model -> report tree transformation
and the HTML assembly; this module only handles files.
"""
from pathlib import Path
from typing import Optional, Union

from loguru import logger

from datamine.config import ReportConfig, DEFAULT_CONFIG
from datamine.model import load_result_model, load_validation_model
from datamine.report.assembler import build_report
from datamine.report.html_builder import build_report_html, build_validation_html
from datamine.report.validation import build_validation_report

MODES = ('datamine', 'validation')


def render_html(
    model_path: Union[str, Path],
    mode: str = 'datamine',
    config: ReportConfig = DEFAULT_CONFIG,
) -> str:
    """Load a model document and render it as HTML."""
    if mode == 'datamine':
        report = build_report(load_result_model(model_path), config)
        return build_report_html(report)
    if mode == 'validation':
        report = build_validation_report(load_validation_model(model_path), config)
        return build_validation_html(report)
    raise ValueError(f"Unknown report mode: {mode}. Available: {', '.join(MODES)}")


def render_report_file(
    model_path: Union[str, Path],
    output_path: Union[str, Path],
    mode: str = 'datamine',
    config: Optional[ReportConfig] = None,
) -> Path:
    """Render a model document and write the HTML to ``output_path``."""
    html_content = render_html(model_path, mode, config or DEFAULT_CONFIG)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(html_content)

    logger.info(f"Report saved to: {output_path}")
    return output_path

"""Renders report trees as self-contained HTML documents.

Heatmap and ranking charts are serialized as Plotly JSON and initialized on
load. Clicking a strategy's equity curve or weekday plot opens its detail
view from the descriptor embedded in the image's data attribute.
"""
import json
from html import escape
from typing import Dict, List

from datamine.report.assembler import (
    AssetSection, HeatmapSection, ParametersSection, RankingSection, Report, RowGroup,
)
from datamine.report.chart_generators import feature_heatmap, ranking_bars
from datamine.report.formatting import format_percentage
from datamine.report.layout import Cell
from datamine.report.validation import FeatureStatsSection, ValidationReport


def build_report_html(report: Report, title: str = 'Data Mining') -> str:
    """Build the data mining report page."""
    charts: Dict[str, str] = {}
    body = []
    for section in report.sections:
        if isinstance(section, ParametersSection):
            body.append(_build_parameters(section))
        elif isinstance(section, HeatmapSection):
            charts['chart-heatmap'] = feature_heatmap(section.matrix)
            body.append(_build_chart_panel(section.title, 'chart-heatmap'))
        elif isinstance(section, RankingSection):
            chart_id = f"chart-ranking-{section.table.slot_index + 1}"
            charts[chart_id] = ranking_bars(section.table)
            body.append(_build_ranking(section, chart_id))
        elif isinstance(section, AssetSection):
            body.append(_build_asset(section))

    return _page(title, ''.join(body), _build_javascript(charts))


def build_validation_html(report: ValidationReport) -> str:
    """Build the archive validation page."""
    features = ''.join(_build_feature_stats(f) for f in report.features)
    body = f"""
<div class="container">
    <div class="dailyRecords">
        <img src="{escape(report.plot)}">
    </div>
    {features}
</div>"""
    return _page(f"Validation - {report.symbol}", body, '')


# ─────────────────────────────────────────────────────────────
#  SECTION BUILDERS
# ─────────────────────────────────────────────────────────────

def _build_parameters(section: ParametersSection) -> str:
    rows = ''.join(f"<tr>{_cell(c)}</tr>" for c in section.cells)
    return f"""
<div class="parameters">
    <h2>{escape(section.title)}</h2>
    <table>{rows}</table>
</div>"""


def _build_chart_panel(title: str, chart_id: str) -> str:
    return f"""
<div class="chart-panel">
    <div class="chart-panel-header">{escape(title)}</div>
    <div class="chart-panel-body"><div id="{chart_id}"></div></div>
</div>"""


def _build_ranking(section: RankingSection, chart_id: str) -> str:
    rows = ''.join(
        f"""<tr>
            <td>{i + 1}</td>
            <td>{escape(e.name)}</td>
            <td class="numeric">{format_percentage(e.frequency, 1)}</td>
        </tr>"""
        for i, e in enumerate(section.table.entries)
    )
    return f"""
<div class="ranking">
    <h2>{escape(section.title)}</h2>
    <table class="data-table">
        <thead><tr><th>#</th><th>Feature</th><th>Frequency</th></tr></thead>
        <tbody>{rows}</tbody>
    </table>
    <div id="{chart_id}"></div>
</div>"""


def _build_asset(section: AssetSection) -> str:
    plot = f'<img class="dailyRecords" src="{escape(section.plot)}">' if section.plot else ''
    # Two strategy tables per line
    pairs = [section.groups[i:i + 2] for i in range(0, len(section.groups), 2)]
    strategies = ''.join(
        f'<div class="strategy">{"".join(_build_row_group(g) for g in pair)}</div>'
        for pair in pairs
    )
    return f"""
<div class="container-data-mine">
    <h1>{escape(section.title)}</h1>
    {plot}
    {strategies}
</div>"""


def _build_row_group(group: RowGroup) -> str:
    detail = escape(json.dumps(group.open_detail().to_dict()), quote=True)
    rows = ''.join(f"<tr>{_cell(primary)}{_cell(secondary)}</tr>" for primary, secondary in group.rows)
    return f"""
<table>
    <caption>{escape(group.title)}</caption>
    {rows}
    <tr>
        <td class="plot" colspan="4">
            <img class="equityCurve" src="{escape(group.equity_curve)}" data-detail="{detail}">
            <img class="weekdayPlot" src="{escape(group.weekday_plot)}" data-detail="{detail}">
        </td>
    </tr>
</table>"""


def _build_feature_stats(section: FeatureStatsSection) -> str:
    rows = ''.join(
        f"<tr><td>{escape(c.label)}:</td>{_value_cell(c)}</tr>" for c in section.cells
    )
    return f"""
<div class="feature">
    <table>{rows}</table>
    <img src="{escape(section.plot)}">
</div>"""


# ─────────────────────────────────────────────────────────────
#  COMPONENT HELPERS
# ─────────────────────────────────────────────────────────────

def _value_cell(cell: Cell) -> str:
    classes: List[str] = []
    if cell.numeric:
        classes.append('numeric')
    if cell.css_class:
        classes.append(cell.css_class)
    cls_attr = f' class="{" ".join(classes)}"' if classes else ''
    return f"<td{cls_attr}>{escape(cell.value)}</td>"


def _cell(cell: Cell) -> str:
    """Description cell followed by the value cell."""
    return f'<td class="description">{escape(cell.label)}</td>{_value_cell(cell)}'


def _page(title: str, body: str, script: str) -> str:
    plotly = '<script src="https://cdn.plot.ly/plotly-2.27.0.min.js"></script>' if script else ''
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>{escape(title)}</title>
    {plotly}
</head>
<body>
{body}
<script>
{script}
</script>
</body>
</html>"""


# ─────────────────────────────────────────────────────────────
#  JAVASCRIPT
# ─────────────────────────────────────────────────────────────

def _build_javascript(charts: Dict[str, str]) -> str:
    """Chart init plus the detail view opener."""
    chart_init = '\n'.join(
        f"    (spec => Plotly.newPlot('{chart_id}', spec.data, spec.layout, {{displayModeBar: false}}))({spec});"
        for chart_id, spec in charts.items()
    )
    return f"""
function showDetail(detail) {{
    const view = window.open("", "_blank", detail.features);
    view.document.write(`<!doctype html><html><head><title></title></head><body></body></html>`);
    view.document.close();
    view.document.title = detail.title;
    detail.plots.forEach(plot => {{
        if (plot.src) {{
            const image = view.document.createElement("img");
            image.src = plot.src;
            image.alt = plot.caption;
            view.document.body.appendChild(image);
        }} else {{
            const empty = view.document.createElement("div");
            empty.style.width = `${{plot.width}}px`;
            empty.style.height = `${{plot.height}}px`;
            view.document.body.appendChild(empty);
        }}
    }});
}}

addEventListener("DOMContentLoaded", () => {{
{chart_init}
    document.querySelectorAll("img[data-detail]").forEach(image => {{
        image.addEventListener("click", () => showDetail(JSON.parse(image.dataset.detail)));
    }});
}});
"""

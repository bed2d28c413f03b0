"""Plotly chart generators for the data mining report.

All functions return a JSON string with 'data' and 'layout' keys suitable
for Plotly.newPlot() in the browser.
"""
import json
from typing import Dict, List

from datamine.report.formatting import format_percentage
from datamine.report.frequency import CombinationMatrix, RankedTable

PLOTLY_LAYOUT = {
    'paper_bgcolor': 'rgba(0,0,0,0)',
    'plot_bgcolor': 'rgba(0,0,0,0)',
    'font': {'family': 'system-ui, sans-serif', 'size': 12},
    'margin': {'l': 50, 'r': 20, 't': 40, 'b': 40},
}


def _base_layout(**overrides) -> Dict:
    """Create a base Plotly layout merged with overrides."""
    layout = {**PLOTLY_LAYOUT}
    for k, v in overrides.items():
        if isinstance(v, dict) and k in layout and isinstance(layout[k], dict):
            layout[k] = {**layout[k], **v}
        else:
            layout[k] = v
    return layout


def chart_to_json(data: List[Dict], layout: Dict) -> str:
    """Serialize chart data + layout to JSON for embedding in a <script> block."""
    text = json.dumps({'data': data, 'layout': layout}, default=str)
    # a feature name holding "</script>" must not close the block
    return text.replace('</', '<\\/')


def feature_heatmap(matrix: CombinationMatrix) -> str:
    """Feature combination heatmap, feature #1 on the y axis."""
    if not matrix.names:
        return chart_to_json([], _base_layout(height=200))

    names = list(matrix.names)
    z = [list(row) for row in matrix.values]
    text = [[format_percentage(v, 1) for v in row] for row in matrix.values]

    data = [{
        'type': 'heatmap',
        'x': names,
        'y': names,
        'z': z,
        'text': text,
        'texttemplate': '%{text}',
        'textfont': {'size': 10},
        'colorscale': 'Blues',
        'showscale': False,
        'hovertemplate': '%{y} + %{x}: %{text}<extra></extra>',
    }]

    # Long feature names need room on both axes
    label_margin = min(240, max(len(n) for n in names) * 7 + 20)
    layout = _base_layout(
        height=max(200, len(names) * 28 + label_margin),
        title={'text': 'Feature Combinations', 'font': {'size': 13}},
        margin={'l': label_margin, 'r': 20, 't': label_margin, 'b': 20},
        xaxis={'side': 'top', 'tickangle': -45, 'tickfont': {'size': 10}},
        yaxis={'autorange': 'reversed', 'tickfont': {'size': 10}},
    )

    return chart_to_json(data, layout)


def ranking_bars(table: RankedTable) -> str:
    """Horizontal bars of one slot's ranking, most frequent on top."""
    if not table.entries:
        return chart_to_json([], _base_layout(height=200))

    names = [e.name for e in table.entries]
    values = [e.frequency * 100 for e in table.entries]

    data = [{
        'type': 'bar',
        'orientation': 'h',
        'x': values,
        'y': names,
        'text': [format_percentage(e.frequency, 1) for e in table.entries],
        'textposition': 'outside',
        'hovertemplate': '%{y}: %{text}<extra></extra>',
    }]

    layout = _base_layout(
        height=max(200, len(names) * 22 + 60),
        title={'text': table.title, 'font': {'size': 13}},
        xaxis={'ticksuffix': '%'},
        yaxis={'autorange': 'reversed', 'tickfont': {'size': 10}},
        margin={'l': 160, 'r': 40, 't': 40, 'b': 30},
    )

    return chart_to_json(data, layout)

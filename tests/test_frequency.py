"""Feature frequency aggregation tests."""
import pytest

from datamine.model import FeatureSummary, ModelIntegrityError
from datamine.report.frequency import (
    build_combination_matrix,
    frequency_slot_count,
    frequency_table,
    rank_all_slots,
    rank_by_slot,
)


@pytest.fixture
def summary(feature_summary_dict):
    return FeatureSummary.from_dict(feature_summary_dict)


class TestCombinationMatrix:
    def test_passes_values_through(self, summary):
        matrix = build_combination_matrix(summary)
        assert matrix.names == ('Momentum8', 'Momentum24', 'Returns48')
        assert matrix.values == summary.combinations

    def test_wrong_row_count(self, feature_summary_dict):
        feature_summary_dict['combinations'] = feature_summary_dict['combinations'][:2]
        with pytest.raises(ModelIntegrityError):
            build_combination_matrix(FeatureSummary.from_dict(feature_summary_dict))

    def test_ragged_rows(self, feature_summary_dict):
        feature_summary_dict['combinations'][1] = [0.2, 0.0]
        with pytest.raises(ModelIntegrityError):
            build_combination_matrix(FeatureSummary.from_dict(feature_summary_dict))

    def test_asymmetric_matrix_is_not_rejected(self, feature_summary_dict):
        feature_summary_dict['combinations'][0][1] = 0.9
        matrix = build_combination_matrix(FeatureSummary.from_dict(feature_summary_dict))
        assert matrix.values[0][1] == 0.9
        assert matrix.values[1][0] == 0.2


class TestRankBySlot:
    def test_descending(self, summary):
        table = rank_by_slot(summary, 0)
        assert [e.name for e in table.entries] == ['Momentum24', 'Returns48', 'Momentum8']
        assert [e.frequency for e in table.entries] == [0.5, 0.3, 0.2]
        assert table.title == 'Feature 1'

    def test_second_slot(self, summary):
        table = rank_by_slot(summary, 1)
        assert [e.name for e in table.entries] == ['Momentum8', 'Momentum24', 'Returns48']
        assert table.title == 'Feature 2'

    def test_ties_keep_input_order(self):
        summary = FeatureSummary.from_dict({
            'features': [
                {'name': 'A', 'frequencies': [0.5]},
                {'name': 'B', 'frequencies': [0.5]},
            ],
            'combinations': [[0.5, 0.0], [0.0, 0.5]],
        })
        assert [e.name for e in rank_by_slot(summary, 0).entries] == ['A', 'B']

    def test_ties_keep_input_order_among_many(self):
        summary = FeatureSummary.from_dict({
            'features': [
                {'name': 'C', 'frequencies': [0.1]},
                {'name': 'A', 'frequencies': [0.3]},
                {'name': 'D', 'frequencies': [0.1]},
                {'name': 'B', 'frequencies': [0.3]},
                {'name': 'E', 'frequencies': [0.2]},
            ],
            'combinations': [],
        })
        names = [e.name for e in rank_by_slot(summary, 0).entries]
        assert names == ['A', 'B', 'E', 'C', 'D']

    def test_does_not_reorder_model(self, summary):
        before = summary.features
        rank_by_slot(summary, 0)
        assert summary.features == before

    def test_slot_out_of_range(self, summary):
        with pytest.raises(IndexError):
            rank_by_slot(summary, 2)

    def test_mismatched_lengths(self, feature_summary_dict):
        feature_summary_dict['features'][2]['frequencies'] = [0.3]
        summary = FeatureSummary.from_dict(feature_summary_dict)
        with pytest.raises(ModelIntegrityError, match='Returns48=1'):
            rank_by_slot(summary, 0)


class TestRankAllSlots:
    def test_one_table_per_slot(self, summary):
        tables = rank_all_slots(summary)
        assert [t.slot_index for t in tables] == [0, 1]

    def test_empty_summary(self):
        summary = FeatureSummary(features=(), combinations=())
        assert frequency_slot_count(summary) == 0
        assert rank_all_slots(summary) == []


def test_frequency_table_shape(summary):
    table = frequency_table(summary)
    assert list(table.columns) == ['Feature 1', 'Feature 2']
    assert list(table.index) == ['Momentum8', 'Momentum24', 'Returns48']
    assert table.loc['Momentum24', 'Feature 1'] == 0.5

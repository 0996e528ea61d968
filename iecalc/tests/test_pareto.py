"""
Tests for Pareto analysis.

Validates:
1. Ranking, percentages and cumulative totals
2. Vital-few selection against the threshold
3. Edge cases: empty input, dominant first item, ties, zero total
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

from iecalc.pareto import (
    ParetoItem,
    analyze_pareto,
    ideal_vital_few_count,
    sample_defect_data,
)


class TestAnalyzePareto:
    """Test ranking and vital-few selection."""

    def test_defect_data(self):
        result = analyze_pareto(sample_defect_data(), threshold=80)
        assert result.total_value == pytest.approx(100)
        assert result.vital_few_count == 2
        assert result.vital_few_categories == ("Machine Breakdown", "Material Defects")
        assert result.vital_few_percentage == pytest.approx(70.0)
        assert result.trivial_many_count == 5

    def test_cumulative_percentages(self):
        result = analyze_pareto(sample_defect_data(), threshold=80)
        cumulative = [item.cumulative_percentage for item in result.items]
        assert cumulative[:3] == [pytest.approx(42.0), pytest.approx(70.0), pytest.approx(85.0)]
        assert cumulative[-1] == pytest.approx(100.0)
        assert cumulative == sorted(cumulative)

    def test_ranks_and_ids_preserved(self):
        result = analyze_pareto(sample_defect_data())
        assert [item.rank for item in result.items] == list(range(1, 8))
        assert result.items[0].id == "1"
        assert result.items[0].percentage == pytest.approx(42.0)

    def test_sorted_regardless_of_input_order(self):
        items = list(reversed(sample_defect_data()))
        result = analyze_pareto(items, threshold=80)
        assert result.items[0].category == "Machine Breakdown"
        assert result.vital_few_count == 2

    def test_higher_threshold_widens_vital_few(self):
        result = analyze_pareto(sample_defect_data(), threshold=90)
        assert result.vital_few_count == 3

    def test_vital_few_is_a_prefix(self):
        result = analyze_pareto(sample_defect_data(), threshold=95)
        flags = [item.is_vital_few for item in result.items]
        assert flags == sorted(flags, reverse=True)

    def test_dominant_first_item_always_vital(self):
        items = [ParetoItem("A", 90), ParetoItem("B", 5), ParetoItem("C", 5)]
        result = analyze_pareto(items, threshold=80)
        assert result.vital_few_count == 1
        assert result.items[0].is_vital_few is True

    def test_ties_keep_input_order(self):
        items = [ParetoItem("first", 10), ParetoItem("second", 10), ParetoItem("third", 20)]
        result = analyze_pareto(items)
        assert [item.category for item in result.items] == ["third", "first", "second"]

    def test_zero_total(self):
        result = analyze_pareto([ParetoItem("A", 0), ParetoItem("B", 0)])
        assert result.total_value == 0
        assert all(item.percentage == 0.0 for item in result.items)

    def test_same_inputs_same_result(self):
        items = sample_defect_data()
        assert analyze_pareto(items, threshold=80) == analyze_pareto(items, threshold=80)

    def test_empty_input(self):
        result = analyze_pareto([])
        assert result.items == ()
        assert result.vital_few_count == 0
        assert result.total_value == 0.0

    def test_default_threshold_from_config(self, monkeypatch):
        from iecalc import config
        monkeypatch.setattr(config, 'PARETO_THRESHOLD', 90.0)
        result = analyze_pareto(sample_defect_data())
        assert result.vital_few_threshold == 90.0
        assert result.vital_few_count == 3


class TestIdealVitalFewCount:

    @pytest.mark.parametrize("total, expected", [
        (0, 1),
        (1, 1),
        (5, 1),
        (7, 2),
        (10, 2),
        (11, 3),
    ])
    def test_twenty_percent(self, total, expected):
        assert ideal_vital_few_count(total) == expected

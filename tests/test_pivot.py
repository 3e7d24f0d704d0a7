"""Tests for relative pivot selection."""
import pytest

from lupivot.errors import LinearlyDependentRow
from lupivot.examples import scaled_pivot_example, three_by_three_example
from lupivot.pivot import row_magnitude, select_pivot
from lupivot.store import MatrixStore


def column_magnitude_choice(rows, pivot):
    """Row textbook partial pivoting would choose, for contrast."""
    return max(range(pivot, len(rows)), key=lambda r: abs(rows[r][pivot]))


class TestRelativeRule:

    def test_dominant_row_beats_largest_entry(self):
        rows = scaled_pivot_example().values
        store = MatrixStore.from_rows(rows)
        assert column_magnitude_choice(rows, 0) == 0
        assert select_pivot(store, 0) == 1

    def test_ties_keep_lowest_row(self):
        # Rows 0 and 1 both score 1.0; row 2 scores 8/9.
        store = three_by_three_example().build_store()
        assert select_pivot(store, 0) == 0

    def test_all_zero_column_keeps_pivot(self):
        store = MatrixStore.from_rows([[0.0, 1.0], [0.0, 2.0]])
        assert select_pivot(store, 0) == 0

    def test_only_remaining_columns_are_scanned(self):
        # At pivot 1 the large first column no longer counts.
        store = MatrixStore.from_rows([
            [1.0, 0.0, 0.0],
            [100.0, 1.0, 4.0],
            [-100.0, 2.0, 2.0],
        ])
        assert row_magnitude(store, 1, 1) == 4.0
        assert row_magnitude(store, 1, 0) == 100.0
        assert select_pivot(store, 1) == 2

    @pytest.mark.parametrize("row, factor", [(0, 4.0), (1, 0.25), (2, 1024.0)])
    def test_row_scaling_does_not_change_choice(self, row, factor):
        rows = [
            [2.0, 1.0, 3.0],
            [1.0, 4.0, 1.0],
            [3.0, 1.0, 1.0],
        ]
        baseline = select_pivot(MatrixStore.from_rows(rows), 0)
        scaled = [list(r) for r in rows]
        scaled[row] = [value * factor for value in scaled[row]]
        assert baseline == 2
        assert select_pivot(MatrixStore.from_rows(scaled), 0) == baseline

    def test_pivot_out_of_range(self):
        store = MatrixStore.from_rows([[1.0]])
        with pytest.raises(ValueError):
            select_pivot(store, 1)


class TestDependentRows:

    def test_zero_row_rejected(self):
        store = MatrixStore.from_rows([[1.0, 2.0], [0.0, 0.0]])
        with pytest.raises(LinearlyDependentRow) as excinfo:
            select_pivot(store, 0)
        assert excinfo.value.row == 1
        assert excinfo.value.pivot == 0
        assert excinfo.value.row_max == 0.0

    def test_small_row_rejected_even_when_not_chosen(self):
        # Row 1 would never win, but it is still checked as it is scanned.
        store = MatrixStore.from_rows([[1.0, 0.0], [1e-9, 1e-9]], tolerance=1e-6)
        with pytest.raises(LinearlyDependentRow) as excinfo:
            select_pivot(store, 0)
        assert excinfo.value.row == 1
        assert excinfo.value.tolerance == 1e-6

    def test_explicit_tolerance_overrides_store(self):
        store = MatrixStore.from_rows([[2.0, 1.0], [1.0, 3.0]], tolerance=1e-6)
        assert select_pivot(store, 0) == 0
        with pytest.raises(LinearlyDependentRow):
            select_pivot(store, 0, tolerance=10.0)

    def test_zero_row_rejected_with_zero_tolerance(self):
        store = MatrixStore.from_rows([[1.0, 2.0], [0.0, 0.0]], tolerance=0.0)
        with pytest.raises(LinearlyDependentRow):
            select_pivot(store, 0)

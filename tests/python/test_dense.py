"""
Tests for DenseMatrix.
"""

import logging

import pytest
import numpy as np

import rowmat
from rowmat import (
    DenseMatrix,
    DType,
    RowSizeError,
    RowIndexError,
    ColumnIndexError,
    SamplingConfig,
    ValidationConfig,
)


class TestDenseCreation:
    """Test DenseMatrix creation."""

    def test_create_empty(self):
        """New matrix has the requested columns and no rows."""
        mat = DenseMatrix(3)
        assert mat.columns == 3
        assert mat.rows == 0
        assert mat.shape == (0, 3)
        assert len(mat) == 0
        assert mat.dtype == DType.float64

    def test_create_bool(self):
        """Bool matrices accept the DType, its string, or the numpy type."""
        assert DenseMatrix(2, dtype=rowmat.bool_).dtype == DType.bool
        assert DenseMatrix(2, dtype='bool').dtype == DType.bool
        assert DenseMatrix(2, dtype=np.bool_).dtype == DType.bool

    def test_negative_columns(self):
        """Negative column counts are rejected."""
        with pytest.raises(ValueError):
            DenseMatrix(-1)

    def test_unsupported_dtype(self):
        """Only float64 and bool are supported."""
        with pytest.raises(ValueError):
            DenseMatrix(3, dtype='int32')

    def test_zero_columns_has_zero_rows(self):
        """A zero-column matrix reports zero rows instead of dividing by zero."""
        mat = DenseMatrix(0)
        mat.add_row([])
        assert mat.rows == 0
        assert mat.shape == (0, 0)


class TestDenseRows:
    """Test row-level operations."""

    def test_add_row_scenario(self):
        """Add, reject a short row, then append a column."""
        mat = DenseMatrix(3)
        mat.add_row([1, 2, 3])
        assert mat.rows == 1

        with pytest.raises(RowSizeError):
            mat.add_row([1, 2])
        assert mat.rows == 1

        mat.append_column(0)
        assert mat.columns == 4
        np.testing.assert_array_equal(mat.get_row(0), [1, 2, 3, 0])

    def test_add_row_keeps_buffer_invariant(self):
        """Each successful add grows rows by one and the buffer by one row."""
        mat = DenseMatrix(4)
        for i in range(40):
            mat.add_row([i, i, i, i])
            assert mat.rows == i + 1
            assert mat.data.size == mat.rows * mat.columns

    def test_add_row_failure_leaves_matrix_unchanged(self, small_matrix):
        """A rejected row does not touch the buffer."""
        before = small_matrix.data.copy()
        with pytest.raises(RowSizeError):
            small_matrix.add_row([1.0, 2.0, 3.0, 4.0])
        with pytest.raises(RowSizeError):
            small_matrix.add_row([[1.0, 2.0, 3.0]])
        np.testing.assert_array_equal(small_matrix.data, before)

    def test_get_row_is_a_view(self, small_matrix):
        """Writes through a row view land in the matrix."""
        row = small_matrix.get_row(1)
        row[0] = 40.0
        assert small_matrix.get_value(1, 0) == 40.0

    def test_get_row_bounds(self, small_matrix):
        """Row indices are valid in [0, rows)."""
        with pytest.raises(RowIndexError):
            small_matrix.get_row(-1)
        with pytest.raises(RowIndexError):
            small_matrix.get_row(3)

    def test_remove_row(self, small_matrix):
        """Removing a middle row shifts the rest down."""
        small_matrix.remove_row(1)
        assert small_matrix.rows == 2
        np.testing.assert_array_equal(small_matrix.get_row(0), [1, 2, 3])
        np.testing.assert_array_equal(small_matrix.get_row(1), [7, 8, 9])

    def test_remove_last_row(self, small_matrix):
        """Removing the last row keeps the earlier rows intact."""
        small_matrix.remove_row(2)
        assert small_matrix.shape == (2, 3)
        np.testing.assert_array_equal(small_matrix.get_row(1), [4, 5, 6])

    def test_remove_row_bounds(self, small_matrix):
        """remove_row uses the same bounds as get_row."""
        with pytest.raises(RowIndexError):
            small_matrix.remove_row(3)
        assert small_matrix.rows == 3

    def test_iterate_rows(self, small_matrix):
        """Iterating a matrix yields each row once."""
        sums = [float(row.sum()) for row in small_matrix]
        assert sums == [6.0, 15.0, 24.0]


class TestDenseCells:
    """Test cell access."""

    def test_get_value(self, small_matrix):
        """Cells are addressed as row * columns + column."""
        assert small_matrix.get_value(0, 0) == 1.0
        assert small_matrix.get_value(1, 2) == 6.0
        assert small_matrix.get_value(2, 1) == 8.0
        assert isinstance(small_matrix.get_value(2, 1), float)

    def test_update_value(self, small_matrix):
        """update_value writes in place."""
        small_matrix.update_value(-1.0, 2, 2)
        assert small_matrix.get_value(2, 2) == -1.0
        assert small_matrix.data[8] == -1.0

    def test_cell_bounds(self, small_matrix):
        """Rows are checked before columns; both ranges are half-open."""
        with pytest.raises(RowIndexError):
            small_matrix.get_value(3, 0)
        with pytest.raises(RowIndexError):
            small_matrix.get_value(3, 7)
        with pytest.raises(ColumnIndexError):
            small_matrix.get_value(0, 3)
        with pytest.raises(ColumnIndexError):
            small_matrix.update_value(1.0, 0, -1)

    def test_non_integer_indices(self, small_matrix):
        """Float indices raise the typed errors; numpy integers are accepted."""
        with pytest.raises(RowIndexError):
            small_matrix.get_value(0.5, 0)
        with pytest.raises(ColumnIndexError):
            small_matrix.update_value(1.0, 0, 1.0)
        with pytest.raises(RowIndexError):
            small_matrix.get_row(1.0)
        with pytest.raises(ColumnIndexError):
            small_matrix.get_column_data("0")
        assert small_matrix.get_value(np.int64(1), np.int32(2)) == 6.0

    def test_bool_cells(self, bool_matrix):
        """Bool cells come back as Python bools."""
        assert bool_matrix.get_value(0, 1) is True
        bool_matrix.update_value(True, 1, 1)
        assert bool_matrix.get_value(1, 1) is True


class TestDenseColumns:
    """Test column operations."""

    def test_append_column(self, small_matrix):
        """Existing values keep their row-relative position."""
        small_matrix.append_column(-1.0)
        assert small_matrix.shape == (3, 4)
        assert small_matrix.data.size == 12
        np.testing.assert_array_equal(small_matrix.get_row(0), [1, 2, 3, -1])
        np.testing.assert_array_equal(small_matrix.get_row(2), [7, 8, 9, -1])

    def test_append_column_then_drop(self, small_matrix):
        """Dropping the appended column restores the original rows."""
        before = small_matrix.to_numpy()
        small_matrix.append_column(0.0)
        np.testing.assert_array_equal(small_matrix.to_numpy()[:, :3], before)

    def test_append_column_to_empty(self):
        """Appending to an empty matrix only bumps the column count."""
        mat = DenseMatrix(2)
        mat.append_column(5.0)
        assert mat.shape == (0, 3)
        mat.add_row([1, 2, 3])
        assert mat.rows == 1

    def test_append_column_bool(self, bool_matrix):
        """Bool matrices take a bool default."""
        bool_matrix.append_column(True)
        np.testing.assert_array_equal(bool_matrix.get_row(1), [False, False, False, True])

    def test_get_column_data(self, small_matrix):
        """Column data covers every row."""
        np.testing.assert_array_equal(small_matrix.get_column_data(1), [2, 5, 8])

    def test_get_column_data_is_a_copy(self, small_matrix):
        """Column data does not alias the buffer."""
        column = small_matrix.get_column_data(0)
        column[0] = 100.0
        assert small_matrix.get_value(0, 0) == 1.0

    def test_get_column_data_bounds(self, small_matrix):
        """Column data rejects indices outside [0, columns)."""
        with pytest.raises(ColumnIndexError):
            small_matrix.get_column_data(3)
        with pytest.raises(ColumnIndexError):
            small_matrix.get_column_data(-1)


class TestDenseStatistics:
    """Test whole-row statistics."""

    def test_max_min_sum(self, small_matrix):
        """Greatest and least row sums."""
        np.testing.assert_array_equal(small_matrix.max_sum(), [7, 8, 9])
        np.testing.assert_array_equal(small_matrix.min_sum(), [1, 2, 3])

    def test_sum_ties_pick_earliest_row(self):
        """The first row with the extreme sum wins."""
        mat = DenseMatrix(2)
        mat.add_row([0, 1])
        mat.add_row([1, 0])
        mat.add_row([3, 3])
        mat.add_row([6, 0])
        np.testing.assert_array_equal(mat.max_sum(), [3, 3])
        np.testing.assert_array_equal(mat.min_sum(), [0, 1])

    def test_statistics_on_empty(self):
        """Empty matrices have no extreme or mode row."""
        mat = DenseMatrix(3)
        assert mat.max_sum() is None
        assert mat.min_sum() is None
        assert mat.mode() is None

    def test_mode(self):
        """The most repeated row is returned."""
        mat = DenseMatrix(2)
        mat.add_row([2, 2])
        mat.add_row([1, 1])
        mat.add_row([1, 1])
        np.testing.assert_array_equal(mat.mode(), [1, 1])

    def test_mode_tie_prefers_first_seen(self):
        """Groups with equal counts resolve to the one seen first."""
        mat = DenseMatrix(2)
        for row in ([3, 4], [1, 1], [1, 1], [3, 4]):
            mat.add_row(row)
        np.testing.assert_array_equal(mat.mode(), [3, 4])

    def test_non_zero_rows(self):
        """All-zero rows are dropped, order kept."""
        mat = DenseMatrix(2)
        for row in ([0, 0], [0, 1], [0, 0], [2, 0]):
            mat.add_row(row)

        nz = mat.non_zero_rows()
        assert nz is not mat
        assert nz.columns == 2
        assert nz.rows == 2
        np.testing.assert_array_equal(nz.get_row(0), [0, 1])
        np.testing.assert_array_equal(nz.get_row(1), [2, 0])

    def test_non_zero_rows_bool(self, bool_matrix):
        """For bool matrices the zero value is False."""
        nz = bool_matrix.non_zero_rows()
        assert nz.dtype == DType.bool
        assert nz.rows == 1
        assert nz.get_value(0, 0) is True


class TestDenseSample:
    """Test Bernoulli row sampling."""

    @pytest.fixture
    def tall_matrix(self):
        mat = DenseMatrix(3)
        for i in range(100):
            mat.add_row([i, i, i])
        return mat

    def test_negative_amount(self, tall_matrix):
        """Negative amounts give an empty matrix."""
        sample = tall_matrix.sample(-1)
        assert sample.rows == 0
        assert sample.columns == 3

    def test_amount_at_least_elements_returns_self(self, tall_matrix):
        """The amount is compared with the element count, not the row count."""
        assert tall_matrix.sample(300) is tall_matrix
        assert tall_matrix.sample(1000) is tall_matrix
        assert tall_matrix.sample(150) is not tall_matrix

    def test_zero_amount_keeps_nothing(self, tall_matrix):
        """A zero threshold rejects every draw."""
        assert tall_matrix.sample(0).rows == 0

    def test_threshold_above_every_draw_keeps_all(self, tall_matrix):
        """299/300 of the scale is above the largest integer draw."""
        sample = tall_matrix.sample(299)
        assert sample.rows == 100
        np.testing.assert_array_equal(sample.to_numpy(), tall_matrix.to_numpy())

    def test_sample_is_seeded_by_config(self, tall_matrix):
        """The same seed picks the same rows."""
        with rowmat.config.local(sampling=SamplingConfig(seed=42)):
            first = tall_matrix.sample(150)
        with rowmat.config.local(sampling=SamplingConfig(seed=42)):
            second = tall_matrix.sample(150)

        np.testing.assert_array_equal(first.to_numpy(), second.to_numpy())
        assert 0 < first.rows < 100

    def test_sample_rows_come_from_source(self, tall_matrix):
        """Sampled rows are rows of the source, in source order."""
        rowmat.set_seed(3)
        sample = tall_matrix.sample(150)
        firsts = sample.get_column_data(0)
        assert np.all(np.diff(firsts) > 0)
        for row in sample:
            assert row[0] == row[1] == row[2]

    def test_successive_seeded_samples_differ(self, tall_matrix):
        """Calls draw from one seeded stream, so reseeding replays the sequence."""
        rowmat.set_seed(5)
        first = tall_matrix.sample(150).get_column_data(0).tolist()
        second = tall_matrix.sample(150).get_column_data(0).tolist()
        assert first != second

        rowmat.set_seed(5)
        assert tall_matrix.sample(150).get_column_data(0).tolist() == first
        assert tall_matrix.sample(150).get_column_data(0).tolist() == second


class TestDenseBackingData:
    """Test wholesale buffer replacement."""

    def test_set_backing_data(self):
        """The buffer is replaced and rows follow its length."""
        mat = DenseMatrix(2)
        mat.set_backing_data([1, 2, 3, 4, 5, 6])
        assert mat.shape == (3, 2)
        assert mat.get_value(2, 1) == 6.0

    def test_add_row_after_set_backing_data(self):
        """The replaced buffer still grows on append."""
        mat = DenseMatrix(2)
        mat.set_backing_data(np.array([1.0, 2.0]))
        mat.add_row([3, 4])
        np.testing.assert_array_equal(mat.data, [1, 2, 3, 4])

    def test_ragged_buffer_is_logged(self, caplog):
        """Without validation a ragged buffer is accepted with a warning."""
        mat = DenseMatrix(2)
        with caplog.at_level(logging.WARNING, logger="rowmat.dense"):
            mat.set_backing_data([1, 2, 3])
        assert mat.rows == 1
        assert "not a multiple" in caplog.text

    def test_ragged_buffer_rejected_with_validation(self):
        """With validation enabled a ragged buffer raises and changes nothing."""
        mat = DenseMatrix(2)
        mat.add_row([9, 9])
        with rowmat.config.local(validation=ValidationConfig(check_backing_data=True)):
            with pytest.raises(RowSizeError):
                mat.set_backing_data([1, 2, 3])
        np.testing.assert_array_equal(mat.data, [9, 9])

    def test_ragged_tail_is_dropped(self):
        """The partial last row is ignored, so the next row lands aligned."""
        mat = DenseMatrix(3)
        mat.set_backing_data([1, 2, 3, 4])
        assert mat.data.size == 3
        mat.add_row([7, 8, 9])
        assert mat.rows == 2
        np.testing.assert_array_equal(mat.get_row(1), [7, 8, 9])
        assert mat.data.size % mat.columns == 0

    def test_read_only_buffer_is_copied(self):
        """A read-only buffer is copied so cells stay writeable."""
        source = np.frombuffer(np.array([1.0, 2.0, 3.0, 4.0]).tobytes())
        assert not source.flags.writeable
        mat = DenseMatrix(2)
        mat.set_backing_data(source)
        mat.update_value(9.0, 1, 0)
        assert mat.get_value(1, 0) == 9.0
        np.testing.assert_array_equal(source, [1, 2, 3, 4])

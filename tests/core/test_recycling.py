import numpy as np
import pytest

from extradist.core.recycling import RecycledArrays, recycle, recycle_rows, recycle_to


# ------------------------------- Lengths -------------------------------

def test_output_length_is_longest_input():
    view = RecycledArrays([1.0, 2.0, 3.0], [10.0, 20.0, 30.0, 40.0, 50.0], 7.0)
    assert len(view) == 5
    assert view.lengths == (3, 5, 1)


def test_any_empty_input_gives_empty_output():
    view = RecycledArrays([1.0, 2.0], [])
    assert len(view) == 0
    cols = view.columns()
    assert all(c.shape == (0,) for c in cols)


def test_scalars_and_matrices_are_flattened():
    view = RecycledArrays(3.0, [[1.0, 2.0], [3.0, 4.0]])
    assert view.lengths == (1, 4)
    np.testing.assert_array_equal(view.columns()[1], [1.0, 2.0, 3.0, 4.0])


# ------------------------------- Indexing ------------------------------

def test_slot_reads_each_input_modulo_its_length():
    a = [1.0, 2.0, 3.0]
    b = [10.0, 20.0, 30.0, 40.0, 50.0]
    x, y = RecycledArrays(a, b).columns()
    for i in range(5):
        assert x[i] == a[i % 3]
        assert y[i] == b[i % 5]


def test_blocks_concatenate_to_columns():
    view = RecycledArrays([1.0, 2.0, 3.0], [5.0, 6.0], interval=2)
    cols = view.columns()
    for j, col in enumerate(cols):
        joined = np.concatenate([c[j] for _, _, c in view.blocks()])
        np.testing.assert_array_equal(joined, col)


def test_recycle_helper():
    x, y = recycle([1.0], [4.0, 5.0, 6.0])
    np.testing.assert_array_equal(x, [1.0, 1.0, 1.0])
    np.testing.assert_array_equal(y, [4.0, 5.0, 6.0])


def test_non_numeric_input_raises_type_error():
    with pytest.raises(TypeError):
        RecycledArrays(["a", "b"])


# ------------------------------ Checkpoint -----------------------------

def test_checkpoint_runs_once_per_block():
    calls = []
    view = RecycledArrays(np.arange(25.0), checkpoint=lambda: calls.append(1), interval=10)
    assert sum(stop - start for start, stop, _ in view.blocks()) == 25
    assert len(calls) == 3


def test_blocks_cover_all_slots_and_call_checkpoint():
    calls = []
    view = RecycledArrays(np.arange(7.0), [1.0, 2.0], checkpoint=lambda: calls.append(1), interval=3)
    blocks = list(view.blocks())
    assert [(start, stop) for start, stop, _ in blocks] == [(0, 3), (3, 6), (6, 7)]
    assert len(calls) == 3
    np.testing.assert_array_equal(np.concatenate([c[1] for _, _, c in blocks]),
                                  [1.0, 2.0, 1.0, 2.0, 1.0, 2.0, 1.0])


def test_checkpoint_exception_aborts_iteration():
    class Interrupted(Exception):
        pass

    def stop():
        raise Interrupted

    view = RecycledArrays(np.arange(5.0), checkpoint=stop, interval=2)
    with pytest.raises(Interrupted):
        list(view.blocks())


# --------------------------------- Rows --------------------------------

def test_recycle_rows():
    a = np.array([[1.0, 2.0], [3.0, 4.0]])
    b = np.array([0.5, 0.5])
    ra, rb = recycle_rows(3, a, b)
    np.testing.assert_array_equal(ra, [[1.0, 2.0], [3.0, 4.0], [1.0, 2.0]])
    assert rb.shape == (3, 2)


def test_recycle_to():
    x, y = recycle_to(4, [1.0, 2.0], 3.0)
    np.testing.assert_array_equal(x, [1.0, 2.0, 1.0, 2.0])
    np.testing.assert_array_equal(y, [3.0] * 4)
    assert recycle_to(3, [], [1.0]) is None
    assert all(v.size == 0 for v in recycle_to(0, [], [1.0]))

import pytest

from pricenet.utils import dot, random_double


def test_random_double_stays_in_half_open_range():
    samples = [random_double(-1.0, 1.0) for _ in range(2000)]
    assert all(-1.0 <= s < 1.0 for s in samples)
    assert min(samples) < 0.0 < max(samples)


def test_random_double_with_equal_bounds():
    assert random_double(4.5, 4.5) == 4.5


def test_random_double_shifted_range():
    samples = [random_double(10.0, 11.0) for _ in range(500)]
    assert all(10.0 <= s < 11.0 for s in samples)


def test_dot_with_identity_returns_vector():
    vector = [3.0, -1.5, 7.0]
    identity = [[1.0 if i == j else 0.0 for j in range(3)] for i in range(3)]
    assert dot(identity, vector) == vector


def test_dot_worked_example():
    assert dot([[1.0, 2.0], [3.0, 4.0]], [5.0, 6.0]) == [17.0, 39.0]


def test_dot_is_linear_in_vector():
    matrix = [[0.5, -2.0, 1.0], [3.0, 0.25, -1.0]]
    u = [1.0, 2.0, 3.0]
    v = [-4.0, 0.5, 2.0]
    combined = dot(matrix, [a + b for a, b in zip(u, v)])
    separate = [a + b for a, b in zip(dot(matrix, u), dot(matrix, v))]
    assert combined == pytest.approx(separate)


def test_dot_result_length_matches_rows():
    matrix = [[1.0, 1.0]] * 5
    assert len(dot(matrix, [2.0, 3.0])) == 5


def test_dot_empty_matrix_gives_empty_result():
    assert dot([], [1.0, 2.0]) == []


def test_dot_dimension_mismatch_raises():
    with pytest.raises(ValueError, match="inner dimension"):
        dot([[1.0, 2.0]], [1.0, 2.0, 3.0])


def test_dot_ragged_matrix_raises():
    with pytest.raises(ValueError, match="row 1"):
        dot([[1.0, 2.0], [3.0]], [1.0, 2.0])
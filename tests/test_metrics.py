"""
Tests for distance metrics and distance matrices.
"""

import numpy as np
import pytest

from density_clustering.clustering import (
    InvalidArgumentError,
    METRICS,
    PrecomputedDistance,
    absolute_difference,
    compute_distance_matrix,
    euclidean_distance,
    get_metric,
    haversine_distance,
    manhattan_distance,
)


def test_basic_metrics():
    assert euclidean_distance([0, 0], [3, 4]) == pytest.approx(5.0)
    assert manhattan_distance([0, 0], [3, -4]) == pytest.approx(7.0)
    assert absolute_difference(2, -3) == 5.0
    assert absolute_difference(np.array([2.0]), np.array([-3.0])) == 5.0


def test_absolute_difference_rejects_multi_column_points():
    with pytest.raises(InvalidArgumentError, match="absolute"):
        absolute_difference([0, 1], [2, 3])


def test_haversine_one_degree_of_latitude():
    # one degree along a meridian is about 111.2 km
    assert haversine_distance([39.0, 116.0], [40.0, 116.0]) == pytest.approx(111195, rel=1e-3)
    assert haversine_distance([39.9, 116.4], [39.9, 116.4]) == 0.0


def test_get_metric():
    assert get_metric('euclidean') is euclidean_distance
    assert set(METRICS) == {'euclidean', 'manhattan', 'absolute', 'haversine'}

    custom = lambda a, b: 0.0
    assert get_metric(custom) is custom

    with pytest.raises(InvalidArgumentError):
        get_metric('chebyshev')
    with pytest.raises(InvalidArgumentError):
        get_metric(42)


def test_euclidean_matrix_matches_pairwise():
    rng = np.random.RandomState(3)
    points = rng.uniform(size=(12, 3))

    matrix = compute_distance_matrix(points, 'euclidean')

    assert matrix.shape == (12, 12)
    np.testing.assert_allclose(np.diag(matrix), 0.0)
    np.testing.assert_allclose(matrix, matrix.T)
    assert matrix[2, 7] == pytest.approx(euclidean_distance(points[2], points[7]))


def test_euclidean_matrix_accepts_1d_values():
    matrix = compute_distance_matrix([0.0, 1.0, 4.0], 'euclidean')

    np.testing.assert_allclose(matrix, [[0, 1, 4], [1, 0, 3], [4, 3, 0]])


def test_haversine_matrix_matches_function():
    points = np.array([[39.90, 116.40], [39.95, 116.30], [40.00, 116.50]])

    matrix = compute_distance_matrix(points, 'haversine')

    for i in range(3):
        for j in range(3):
            assert matrix[i, j] == pytest.approx(haversine_distance(points[i], points[j]), rel=1e-9, abs=1e-6)


def test_custom_metric_matrix():
    words = ['a', 'ab', 'abcd']

    matrix = compute_distance_matrix(words, lambda a, b: abs(len(a) - len(b)))

    np.testing.assert_allclose(matrix, [[0, 1, 3], [1, 0, 2], [3, 2, 0]])


def test_precomputed_distance():
    metric = PrecomputedDistance([[0.0, 2.0], [2.0, 0.0]])

    assert len(metric) == 2
    assert list(metric.objects()) == [0, 1]
    assert metric(0, 1) == 2.0

    with pytest.raises(InvalidArgumentError):
        PrecomputedDistance(np.zeros((2, 3)))

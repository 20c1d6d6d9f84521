"""
Tests for the epsilon-neighborhood query.
"""

import numpy as np
import pytest

from density_clustering.clustering import (
    InvalidArgumentError,
    NeighborhoodQuery,
    euclidean_distance,
    region_query,
)


def test_neighborhood_includes_point_itself(abs_metric):
    objects = [0.0, 5.0, 10.0]

    assert region_query(objects, abs_metric, 1, 1.0) == [1]


def test_boundary_distance_is_excluded(abs_metric):
    # |0 - 1| == epsilon is not a neighbor, 0.999 is
    objects = [0.0, 1.0, 0.999, -1.0, 2.0]

    assert region_query(objects, abs_metric, 0, 1.0) == [0, 2]


def test_result_is_in_ascending_index_order(abs_metric):
    objects = [3.0, 0.1, 2.9, 0.0, 3.1, 0.2]

    assert region_query(objects, abs_metric, 3, 0.5) == [1, 3, 5]
    assert region_query(objects, abs_metric, 0, 0.5) == [0, 2, 4]


def test_metric_not_evaluated_against_self():
    calls = []

    def metric(a, b):
        calls.append((a, b))
        return 100.0

    objects = ['a', 'b', 'c']
    region_query(objects, metric, 0, 1.0)

    assert calls == [('a', 'b'), ('a', 'c')]


def test_works_on_numpy_rows():
    points = np.array([[0.0, 0.0], [0.3, 0.4], [3.0, 4.0]])

    assert region_query(points, euclidean_distance, 0, 0.6) == [0, 1]
    assert region_query(points, euclidean_distance, 0, 0.5) == [0]


def test_negative_distance_is_rejected():
    with pytest.raises(InvalidArgumentError):
        region_query([1, 2], lambda a, b: -1.0, 0, 1.0)


def test_nan_distance_is_rejected():
    def metric(a, b):
        return float('nan') if {a, b} == {0.0, 0.5} else abs(a - b)

    with pytest.raises(InvalidArgumentError, match="NaN"):
        region_query([0.0, 0.5, 0.7], metric, 0, 1.0)


def test_query_object_counts_queries_and_distances(abs_metric):
    query = NeighborhoodQuery(epsilon=1.0)
    objects = [0.0, 0.5, 4.0, 4.2]

    assert query.query(objects, abs_metric, 0) == [0, 1]
    assert query.query(objects, abs_metric, 2) == [2, 3]
    assert query.n_queries == 2
    assert query.n_distance_evaluations == 6

    query.reset()
    assert query.n_queries == 0
    assert query.n_distance_evaluations == 0

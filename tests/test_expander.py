"""
Tests for breadth-first cluster expansion from a seed.
"""

import sys

from density_clustering.clustering import (
    ClusterExpander,
    NeighborhoodQuery,
    FIRST_CLUSTER,
    NOISE,
    UNCLASSIFIED,
)


def make_expander(n, min_points, epsilon=1.0):
    cluster_ids = [UNCLASSIFIED] * n
    query = NeighborhoodQuery(epsilon)
    return ClusterExpander(cluster_ids, min_points, query), cluster_ids, query


def test_sparse_seed_becomes_noise(abs_metric):
    objects = [0.0, 5.0, 5.1]
    expander, labels, _ = make_expander(len(objects), min_points=2)

    assert expander.expand(objects, abs_metric, 0) is False
    assert labels == [NOISE, UNCLASSIFIED, UNCLASSIFIED]
    assert expander.current_cluster_id == FIRST_CLUSTER


def test_dense_seed_labels_whole_neighborhood(abs_metric):
    objects = [0.0, 0.5, 1.2]
    expander, labels, query = make_expander(len(objects), min_points=3)
    labels[0] = NOISE

    assert expander.expand(objects, abs_metric, 1) is True
    assert labels == [FIRST_CLUSTER] * 3
    # seed plus the two worklist entries
    assert query.n_queries == 3


def test_noise_absorbed_as_border_is_not_expanded(abs_metric):
    # neighborhoods with eps=10: 0:{0,1} 1:{0,1,2} 2:{1,2,3} 3:{2,3}
    objects = [0, 9, 18, 27]
    expander, labels, query = make_expander(len(objects), min_points=3, epsilon=10)
    labels[3] = NOISE

    assert expander.expand(objects, abs_metric, 1) is True
    assert labels == [FIRST_CLUSTER] * 4
    # point 3 was relabeled from noise but never queried
    assert query.n_queries == 3


def test_border_point_does_not_propagate(abs_metric):
    # 4 is a border of the dense group; 5 is only reachable through 4
    objects = [0, 1, 2, 3, 12, 21]
    expander, labels, _ = make_expander(len(objects), min_points=4, epsilon=10)

    assert expander.expand(objects, abs_metric, 0) is True
    assert labels[:5] == [FIRST_CLUSTER] * 5
    assert labels[5] == UNCLASSIFIED


def test_existing_cluster_labels_are_terminal(abs_metric):
    objects = [0.0, 0.5, 0.6, 0.7]
    expander, labels, _ = make_expander(len(objects), min_points=2)
    labels[0] = FIRST_CLUSTER
    expander.current_cluster_id = FIRST_CLUSTER + 1

    assert expander.expand(objects, abs_metric, 2) is True
    assert labels == [FIRST_CLUSTER, FIRST_CLUSTER + 1, FIRST_CLUSTER + 1, FIRST_CLUSTER + 1]


def test_seed_already_in_a_cluster_is_left_alone(abs_metric):
    objects = [0.0, 0.5, 0.6]
    expander, labels, query = make_expander(len(objects), min_points=2)
    labels[0] = FIRST_CLUSTER
    expander.current_cluster_id = FIRST_CLUSTER + 1

    assert expander.expand(objects, abs_metric, 0) is False
    assert labels == [FIRST_CLUSTER, UNCLASSIFIED, UNCLASSIFIED]
    assert query.n_queries == 0


def test_long_chain_expands_without_recursion(abs_metric):
    n = sys.getrecursionlimit() + 200
    objects = [i * 0.5 for i in range(n)]
    expander, labels, query = make_expander(n, min_points=2)

    assert expander.expand(objects, abs_metric, 0) is True
    assert set(labels) == {FIRST_CLUSTER}
    assert query.n_queries == n

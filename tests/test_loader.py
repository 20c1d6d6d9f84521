"""
Tests for point loading and partition persistence.
"""

import numpy as np
import pandas as pd
import pytest

from density_clustering.clustering import NOISE, Partition
from density_clustering.data_processing import load_partition, load_points_csv, save_partition


@pytest.fixture
def points_csv(tmp_path):
    path = tmp_path / "points.csv"
    pd.DataFrame({
        'name': ['a', 'b', 'c'],
        'x': [0.0, 1.0, 2.0],
        'y': [5.0, 6.0, 7.0],
    }).to_csv(path, index=False)
    return path


@pytest.fixture
def partition():
    return Partition(cluster_ids=[2, 2, NOISE, 3], medoid_ids=[0, 3], total_clusters=2)


def test_load_numeric_columns(points_csv):
    points = load_points_csv(str(points_csv))

    np.testing.assert_array_equal(points, [[0, 5], [1, 6], [2, 7]])


def test_load_selected_columns(points_csv):
    points = load_points_csv(str(points_csv), columns=['y'], nrows=2)

    np.testing.assert_array_equal(points, [[5], [6]])


def test_missing_column(points_csv):
    with pytest.raises(ValueError):
        load_points_csv(str(points_csv), columns=['z'])


def test_rows_with_missing_values_are_dropped(tmp_path):
    path = tmp_path / "gaps.csv"
    path.write_text("x,y\n0,1\n,2\n3,oops\n4,5\n")

    with pytest.warns(UserWarning):
        points = load_points_csv(str(path), columns=['x', 'y'])

    np.testing.assert_array_equal(points, [[0, 1], [4, 5]])


def test_no_numeric_columns(tmp_path):
    path = tmp_path / "text.csv"
    path.write_text("name\nfoo\nbar\n")

    with pytest.raises(ValueError):
        load_points_csv(str(path))


def test_save_csv(tmp_path, partition):
    target = save_partition(partition, str(tmp_path / "out" / "labels"), format='csv')

    assert target.suffix == '.csv'
    df = pd.read_csv(target)
    assert df['cluster_id'].tolist() == [2, 2, NOISE, 3]
    assert df['is_medoid'].tolist() == [True, False, False, True]


@pytest.mark.parametrize("fmt", ['json', 'pickle'])
def test_save_and_load_round_trip(tmp_path, partition, fmt):
    target = save_partition(partition, str(tmp_path / "labels"), format=fmt)
    restored = load_partition(str(target))

    np.testing.assert_array_equal(restored.cluster_ids, partition.cluster_ids)
    assert restored.medoid_ids == [0, 3]
    assert restored.total_clusters == 2


def test_unsupported_formats(tmp_path, partition):
    with pytest.raises(ValueError):
        save_partition(partition, str(tmp_path / "labels"), format='xml')
    with pytest.raises(ValueError):
        load_partition(str(tmp_path / "labels.xml"))

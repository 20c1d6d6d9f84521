"""
聚类算法模块
包含DBSCAN算法的邻域查询、簇扩展和划分结果
"""

from .dbscan import DensityClusterer, dbscan, validate_parameters
from .exceptions import InvalidArgumentError
from .expander import ClusterExpander
from .metrics import (
    METRICS,
    PrecomputedDistance,
    compute_distance_matrix,
    get_metric,
    euclidean_distance,
    manhattan_distance,
    absolute_difference,
    haversine_distance
)
from .neighborhood import NeighborhoodQuery, region_query
from .partition import Partition, UNCLASSIFIED, NOISE, FIRST_CLUSTER

__all__ = [
    'DensityClusterer',
    'dbscan',
    'validate_parameters',
    'InvalidArgumentError',
    'ClusterExpander',
    'METRICS',
    'PrecomputedDistance',
    'compute_distance_matrix',
    'get_metric',
    'euclidean_distance',
    'manhattan_distance',
    'absolute_difference',
    'haversine_distance',
    'NeighborhoodQuery',
    'region_query',
    'Partition',
    'UNCLASSIFIED',
    'NOISE',
    'FIRST_CLUSTER'
]

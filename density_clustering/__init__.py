"""
密度聚类
基于DBSCAN的任意度量密度聚类
"""

from .clustering import DensityClusterer, Partition, InvalidArgumentError, dbscan
from .config import ClusteringConfig

__version__ = "0.1.0"

__all__ = [
    'DensityClusterer',
    'Partition',
    'InvalidArgumentError',
    'dbscan',
    'ClusteringConfig'
]

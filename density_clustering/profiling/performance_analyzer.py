"""
综合性能分析
对一次DBSCAN运行同时记录耗时、内存和邻域查询开销，并与scikit-learn结果比对
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple, Union

import numpy as np
from sklearn.cluster import DBSCAN
from sklearn.metrics import adjusted_rand_score

from ..clustering.dbscan import DensityClusterer
from ..clustering.partition import NOISE, Partition
from .memory_profiler import MemoryProfiler
from .time_profiler import TimeProfiler


@dataclass
class ClusteringProfile:
    """一次聚类运行的性能记录"""
    n_points: int
    epsilon: float
    min_points: int
    execution_time: float
    memory_usage_mb: float
    peak_memory_mb: float
    n_queries: int
    n_distance_evaluations: int
    n_clusters: int
    n_noise: int
    top_functions: list = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'n_points': self.n_points,
            'epsilon': self.epsilon,
            'min_points': self.min_points,
            'execution_time': self.execution_time,
            'memory_usage_mb': self.memory_usage_mb,
            'peak_memory_mb': self.peak_memory_mb,
            'n_queries': self.n_queries,
            'n_distance_evaluations': self.n_distance_evaluations,
            'n_clusters': self.n_clusters,
            'n_noise': self.n_noise,
        }


def profile_clustering(points, epsilon: float, min_points: int,
                       metric: Union[str, Callable] = 'euclidean',
                       precompute: bool = False,
                       enable_profiling: bool = False) -> Tuple[Partition, ClusteringProfile]:
    """
    运行DBSCAN并记录性能

    Args:
        points: 点数据
        epsilon: 邻域半径
        min_points: 核心点的最小邻域大小
        metric: 度量名称或可调用对象
        precompute: 是否预计算距离矩阵
        enable_profiling: 是否启用cProfile

    Returns:
        (聚类划分结果, 性能记录)
    """
    clusterer = DensityClusterer(epsilon=epsilon, min_points=min_points,
                                 metric=metric, precompute=precompute)
    time_profiler = TimeProfiler(enable_profiling=enable_profiling)

    with MemoryProfiler() as memory_profiler:
        memory_profiler.take_snapshot("聚类开始前")
        _, time_analysis = time_profiler.profile_function(clusterer.fit, points)
        memory_profiler.take_snapshot("聚类结束后")

    memory_usage, peak_memory = memory_profiler.memory_delta()
    partition = clusterer.partition_

    profile = ClusteringProfile(
        n_points=partition.num_objects,
        epsilon=epsilon,
        min_points=min_points,
        execution_time=time_analysis['execution_time'],
        memory_usage_mb=memory_usage,
        peak_memory_mb=peak_memory,
        n_queries=clusterer.n_queries_,
        n_distance_evaluations=clusterer.n_distance_evaluations_,
        n_clusters=partition.num_clusters,
        n_noise=len(partition.noise_indices()),
        top_functions=time_analysis.get('top_functions', [])
    )

    return partition, profile


def compare_with_reference(points: np.ndarray, partition: Partition,
                           epsilon: float, min_points: int,
                           metric: str = 'euclidean',
                           reference_labels: Optional[np.ndarray] = None) -> Dict[str, Any]:
    """
    与scikit-learn的DBSCAN结果比对

    scikit-learn使用 <= eps 的邻域判定，连续数据上与严格小于等价。

    Args:
        points: 点数据
        partition: 待比对的划分结果
        epsilon: 邻域半径
        min_points: 核心点的最小邻域大小
        metric: scikit-learn支持的度量名称
        reference_labels: 已有的参考标签（噪声为-1），为None时现场计算

    Returns:
        比对结果：调整兰德指数、噪声集合是否一致、簇数量
    """
    if reference_labels is None:
        reference_labels = DBSCAN(eps=epsilon, min_samples=min_points,
                                  metric=metric).fit_predict(points)

    labels = partition.to_labels()
    reference_noise = reference_labels == -1
    noise = partition.cluster_ids == NOISE

    return {
        'adjusted_rand_index': float(adjusted_rand_score(reference_labels, labels)),
        'noise_match': bool(np.array_equal(noise, reference_noise)),
        'n_clusters': partition.num_clusters,
        'n_clusters_reference': int(len(set(reference_labels.tolist()) - {-1})),
    }

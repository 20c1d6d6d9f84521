"""
DBSCAN密度聚类
Ester等人提出的经典密度聚类算法，度量作为黑盒传入
"""

import math
import numbers
import time
import warnings
from typing import Any, Callable, Dict, Optional, Sequence, Union

import numpy as np

from .exceptions import InvalidArgumentError
from .expander import ClusterExpander
from .metrics import PrecomputedDistance, compute_distance_matrix, get_metric
from .neighborhood import NeighborhoodQuery
from .partition import UNCLASSIFIED, Partition


def validate_parameters(epsilon: float, min_points: int) -> None:
    """
    检查聚类参数

    Args:
        epsilon: 邻域半径，必须是大于0的有限数
        min_points: 核心点的最小邻域大小，必须是不小于1的整数
    """
    if isinstance(epsilon, bool) or not isinstance(epsilon, numbers.Real):
        raise InvalidArgumentError(f"epsilon必须是数值，实际为: {epsilon!r}")
    if not math.isfinite(epsilon) or epsilon <= 0:
        raise InvalidArgumentError(f"epsilon必须是大于0的有限数，实际为: {epsilon}")

    if isinstance(min_points, bool) or not isinstance(min_points, numbers.Integral):
        raise InvalidArgumentError(f"min_points必须是整数，实际为: {min_points!r}")
    if min_points < 1:
        raise InvalidArgumentError(f"min_points必须不小于1，实际为: {min_points}")

    if min_points == 1:
        warnings.warn("min_points=1时每个点都是核心点，结果中不会出现噪声")


class DensityClusterer:
    """DBSCAN密度聚类器"""

    def __init__(self, epsilon: float = 0.5, min_points: int = 5,
                 metric: Union[str, Callable] = 'euclidean',
                 precompute: bool = False, verbose: bool = False):
        """
        初始化DBSCAN参数

        Args:
            epsilon: 邻域半径，距离严格小于epsilon的点互为邻居
            min_points: 核心点的最小邻域大小（含自身）
            metric: fit()使用的度量名称或可调用对象
            precompute: fit()是否先计算完整距离矩阵
            verbose: 是否打印运行摘要
        """
        validate_parameters(epsilon, min_points)

        self.epsilon = epsilon
        self.min_points = min_points
        self.metric = metric
        self.precompute = precompute
        self.verbose = verbose

        self.partition_: Optional[Partition] = None
        self.labels_ = None
        self.medoid_indices_ = None
        self.n_queries_ = 0
        self.n_distance_evaluations_ = 0
        self.execution_time = 0.0

    def run(self, objects: Sequence, metric: Union[str, Callable]) -> Partition:
        """
        对对象序列执行DBSCAN

        按索引升序扫描对象，对每个仍未分类的对象尝试扩展新簇。

        Args:
            objects: 可随机访问的对象序列
            metric: 相异度函数 (a, b) -> float，或已注册的度量名称

        Returns:
            聚类划分结果
        """
        dmetric = get_metric(metric)
        if len(objects) == 0:
            raise InvalidArgumentError("对象序列不能为空")

        start_time = time.time()
        n_objects = len(objects)

        cluster_ids = [UNCLASSIFIED] * n_objects
        medoid_ids = []
        total_clusters = 0

        neighborhood = NeighborhoodQuery(self.epsilon)
        expander = ClusterExpander(cluster_ids, self.min_points, neighborhood)

        for i in range(n_objects):
            if cluster_ids[i] != UNCLASSIFIED:
                continue

            if expander.expand(objects, dmetric, i):
                medoid_ids.append(i)
                expander.current_cluster_id += 1
                total_clusters += 1

        partition = Partition(
            cluster_ids=np.array(cluster_ids, dtype=np.int64),
            medoid_ids=medoid_ids,
            total_clusters=total_clusters
        )

        # 保存结果
        self.partition_ = partition
        self.labels_ = partition.cluster_ids
        self.medoid_indices_ = np.array(medoid_ids, dtype=np.int64)
        self.n_queries_ = neighborhood.n_queries
        self.n_distance_evaluations_ = neighborhood.n_distance_evaluations
        self.execution_time = time.time() - start_time

        if self.verbose:
            print(f"DBSCAN完成: {n_objects} 个对象, {total_clusters} 个簇, "
                  f"{len(partition.noise_indices())} 个噪声点, "
                  f"{self.n_queries_} 次邻域查询, 耗时 {self.execution_time:.4f} 秒")

        return partition

    def fit(self, points) -> 'DensityClusterer':
        """
        使用构造时指定的度量执行聚类

        Args:
            points: 对象序列，常见为形状(n_samples, n_features)的numpy数组

        Returns:
            self: 返回聚类器实例
        """
        if self.precompute:
            distance_matrix = compute_distance_matrix(points, self.metric)
            precomputed = PrecomputedDistance(distance_matrix)
            self.run(precomputed.objects(), precomputed)
        else:
            self.run(points, self.metric)

        return self

    def fit_predict(self, points) -> np.ndarray:
        """执行聚类并返回簇分配数组"""
        return self.fit(points).labels_

    def get_cluster_stats(self) -> Dict[str, Any]:
        """
        获取聚类统计信息

        Returns:
            包含聚类统计信息的字典
        """
        if self.partition_ is None:
            return {}

        stats = self.partition_.get_cluster_stats()
        stats.update({
            'n_queries': self.n_queries_,
            'n_distance_evaluations': self.n_distance_evaluations_,
            'execution_time': self.execution_time,
        })
        return stats


def dbscan(objects: Sequence, metric: Union[str, Callable], epsilon: float,
           min_points: int) -> Partition:
    """
    DBSCAN的函数式接口

    Args:
        objects: 对象序列
        metric: 相异度函数或度量名称
        epsilon: 邻域半径
        min_points: 核心点的最小邻域大小

    Returns:
        聚类划分结果
    """
    return DensityClusterer(epsilon=epsilon, min_points=min_points).run(objects, metric)


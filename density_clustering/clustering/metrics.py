"""
距离度量
提供常用的相异度函数、距离矩阵计算以及基于预计算矩阵的度量
"""

import math
from typing import Callable, Dict, Union

import numpy as np
from numba import jit, prange

from .exceptions import InvalidArgumentError

# 地球平均半径（米）
EARTH_RADIUS_M = 6371000.0


def euclidean_distance(point1, point2) -> float:
    """欧氏距离"""
    diff = np.asarray(point1, dtype=np.float64) - np.asarray(point2, dtype=np.float64)
    return float(np.sqrt(np.sum(diff ** 2)))


def manhattan_distance(point1, point2) -> float:
    """曼哈顿距离"""
    diff = np.asarray(point1, dtype=np.float64) - np.asarray(point2, dtype=np.float64)
    return float(np.sum(np.abs(diff)))


def absolute_difference(value1, value2) -> float:
    """一维数值（或单元素数组）的绝对差"""
    diff = np.subtract(value1, value2, dtype=np.float64)
    if np.size(diff) != 1:
        raise InvalidArgumentError(
            f"absolute度量只适用于一维数值，实际维度: {np.shape(diff)}，多维数据请使用euclidean或manhattan"
        )
    return float(np.abs(diff).item())


def haversine_distance(point1, point2) -> float:
    """
    Haversine距离，适用于地理坐标

    Args:
        point1: 第一个点 [lat, lon]（十进制度数）
        point2: 第二个点 [lat, lon]

    Returns:
        两点之间的大圆距离（米）
    """
    lat1, lon1 = math.radians(point1[0]), math.radians(point1[1])
    lat2, lon2 = math.radians(point2[0]), math.radians(point2[1])

    dlon = lon2 - lon1
    dlat = lat2 - lat1
    a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_M * c


METRICS: Dict[str, Callable] = {
    'euclidean': euclidean_distance,
    'manhattan': manhattan_distance,
    'absolute': absolute_difference,
    'haversine': haversine_distance,
}


def get_metric(metric: Union[str, Callable]) -> Callable:
    """
    解析度量参数

    Args:
        metric: 已注册的度量名称，或可调用对象 (a, b) -> float

    Returns:
        度量函数
    """
    if callable(metric):
        return metric

    if isinstance(metric, str) and metric in METRICS:
        return METRICS[metric]

    raise InvalidArgumentError(
        f"不支持的度量方式: {metric!r}，可选: {', '.join(sorted(METRICS))}"
    )


class PrecomputedDistance:
    """
    基于预计算距离矩阵的度量

    聚类对象为索引序列 ``range(n)``，度量直接查表。
    """

    def __init__(self, distance_matrix: np.ndarray):
        matrix = np.asarray(distance_matrix, dtype=np.float64)
        if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
            raise InvalidArgumentError(f"距离矩阵必须是方阵，实际形状: {matrix.shape}")
        self.distance_matrix = matrix

    def __len__(self) -> int:
        return self.distance_matrix.shape[0]

    def __call__(self, i: int, j: int) -> float:
        return self.distance_matrix[i, j]

    def objects(self) -> range:
        """与矩阵行对应的对象索引序列"""
        return range(len(self))


def compute_distance_matrix(points, metric: Union[str, Callable] = 'euclidean') -> np.ndarray:
    """
    计算距离矩阵

    Args:
        points: 形状为(n_samples, n_features)的数组；自定义度量时可为任意序列
        metric: 度量名称或可调用对象

    Returns:
        距离矩阵，形状为(n_samples, n_samples)
    """
    if metric == 'euclidean':
        # 向量化计算欧氏距离
        points = np.asarray(points, dtype=np.float64)
        if points.ndim == 1:
            points = points[:, np.newaxis]
        diff = points[:, np.newaxis, :] - points[np.newaxis, :, :]
        return np.sqrt(np.sum(diff ** 2, axis=2))

    if metric == 'haversine':
        return _haversine_distance_matrix(np.asarray(points, dtype=np.float64))

    dmetric = get_metric(metric)
    n_samples = len(points)
    distance_matrix = np.zeros((n_samples, n_samples))

    # 假设度量对称，只计算上三角
    for i in range(n_samples):
        for j in range(i + 1, n_samples):
            distance = dmetric(points[i], points[j])
            distance_matrix[i, j] = distance
            distance_matrix[j, i] = distance

    return distance_matrix


@jit(nopython=True, parallel=True)
def _haversine_distance_matrix(points: np.ndarray) -> np.ndarray:
    """
    使用Numba加速的Haversine距离矩阵计算

    Args:
        points: 形状为(n_samples, 2)的数组，[latitude, longitude]

    Returns:
        Haversine距离矩阵（米）
    """
    n_samples = points.shape[0]
    distance_matrix = np.zeros((n_samples, n_samples))
    R = 6371000.0

    lat_rad = np.radians(points[:, 0])
    lon_rad = np.radians(points[:, 1])

    for i in prange(n_samples):
        for j in range(i + 1, n_samples):
            dlon = lon_rad[j] - lon_rad[i]
            dlat = lat_rad[j] - lat_rad[i]

            a = math.sin(dlat / 2) ** 2 + math.cos(lat_rad[i]) * math.cos(lat_rad[j]) * math.sin(dlon / 2) ** 2
            c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
            distance = R * c

            distance_matrix[i, j] = distance
            distance_matrix[j, i] = distance

    return distance_matrix

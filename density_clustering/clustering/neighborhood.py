"""
邻域查询
暴力扫描求指定点的epsilon邻域
"""

from typing import Callable, List, Sequence

from .exceptions import InvalidArgumentError


def region_query(objects: Sequence, metric: Callable, point_idx: int,
                 epsilon: float) -> List[int]:
    """
    查找指定点epsilon邻域内的所有点

    距离严格小于epsilon的点才算邻居，恰好等于epsilon的点不计入。
    结果包含point_idx自身，按索引升序排列。

    Args:
        objects: 可随机访问的对象序列
        metric: 相异度函数 (a, b) -> float
        point_idx: 目标点的索引
        epsilon: 邻域半径

    Returns:
        邻域内点的索引列表
    """
    neighbors = []
    point = objects[point_idx]

    for i in range(len(objects)):
        if i == point_idx:
            neighbors.append(i)
            continue

        distance = metric(point, objects[i])
        # NaN与任何数比较都为False，需单独拒绝
        if not distance >= 0:
            raise InvalidArgumentError(
                f"度量返回了负数或NaN距离: d({point_idx}, {i}) = {distance}"
            )
        if distance < epsilon:
            neighbors.append(i)

    return neighbors


class NeighborhoodQuery:
    """带计数的邻域查询"""

    def __init__(self, epsilon: float):
        """
        Args:
            epsilon: 邻域半径
        """
        self.epsilon = epsilon
        self.n_queries = 0
        self.n_distance_evaluations = 0

    def query(self, objects: Sequence, metric: Callable, point_idx: int) -> List[int]:
        """返回point_idx的epsilon邻域（含自身）"""
        self.n_queries += 1
        self.n_distance_evaluations += len(objects) - 1
        return region_query(objects, metric, point_idx, self.epsilon)

    def reset(self) -> None:
        """清零计数器"""
        self.n_queries = 0
        self.n_distance_evaluations = 0

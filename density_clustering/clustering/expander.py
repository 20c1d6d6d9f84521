"""
簇扩展
从种子点出发按密度可达关系广度优先地生长一个簇
"""

from typing import Callable, List, Sequence

from .neighborhood import NeighborhoodQuery
from .partition import UNCLASSIFIED, NOISE, FIRST_CLUSTER


class ClusterExpander:
    """
    簇扩展器

    持有一次聚类运行共享的簇分配数组和当前簇ID，
    expand() 会原地修改 cluster_ids。
    """

    def __init__(self, cluster_ids: List[int], min_points: int,
                 neighborhood: NeighborhoodQuery):
        """
        Args:
            cluster_ids: 共享的簇分配数组
            min_points: 核心点的最小邻域大小（含自身）
            neighborhood: 邻域查询器
        """
        self.cluster_ids = cluster_ids
        self.min_points = min_points
        self.neighborhood = neighborhood
        self.current_cluster_id = FIRST_CLUSTER

    def expand(self, objects: Sequence, metric: Callable, seed_idx: int) -> bool:
        """
        尝试以seed_idx为种子开始一个新簇

        Args:
            objects: 对象序列
            metric: 相异度函数
            seed_idx: 种子点索引

        Returns:
            是否形成了新簇；邻域过小时种子被标记为噪声并返回False，
            种子已属于某个簇时不做任何修改并返回False
        """
        labels = self.cluster_ids
        cluster_id = self.current_cluster_id

        if labels[seed_idx] >= FIRST_CLUSTER:
            return False

        neighbors = self.neighborhood.query(objects, metric, seed_idx)
        if len(neighbors) < self.min_points:
            labels[seed_idx] = NOISE
            return False

        # 为种子邻域分配当前簇ID，已属于其他簇的点保持不变
        seeds = []
        for point_idx in neighbors:
            if labels[point_idx] == UNCLASSIFIED or labels[point_idx] == NOISE:
                labels[point_idx] = cluster_id
                if point_idx != seed_idx:
                    seeds.append(point_idx)

        # 工作队列在遍历过程中增长，用读游标代替递归
        i = 0
        while i < len(seeds):
            point_idx = seeds[i]
            i += 1

            point_neighbors = self.neighborhood.query(objects, metric, point_idx)
            if len(point_neighbors) < self.min_points:
                # 边界点，不继续扩展
                continue

            for neighbor_idx in point_neighbors:
                label = labels[neighbor_idx]
                if label == UNCLASSIFIED:
                    seeds.append(neighbor_idx)
                    labels[neighbor_idx] = cluster_id
                elif label == NOISE:
                    # 噪声点被吸收为边界点，但不入队
                    labels[neighbor_idx] = cluster_id

        return True

"""
聚类划分结果
保存簇分配数组、代表点列表和簇数量
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

import numpy as np
import pandas as pd

# 标签约定
UNCLASSIFIED = 0  # 尚未分类
NOISE = 1  # 噪声点
FIRST_CLUSTER = 2  # 第一个真实簇的ID


@dataclass
class Partition:
    """
    一次聚类运行的结果

    cluster_ids[i] 为第i个对象的标签（NOISE或簇ID），
    medoid_ids[k] 为簇 FIRST_CLUSTER + k 的种子点索引。
    """

    cluster_ids: np.ndarray
    medoid_ids: List[int] = field(default_factory=list)
    total_clusters: int = 0

    def __post_init__(self):
        self.cluster_ids = np.asarray(self.cluster_ids, dtype=np.int64)
        self.medoid_ids = [int(m) for m in self.medoid_ids]

    def as_tuple(self) -> Tuple[np.ndarray, List[int], int]:
        """返回 (簇分配数组, 代表点列表, 簇数量)"""
        return self.cluster_ids, self.medoid_ids, self.total_clusters

    @property
    def num_objects(self) -> int:
        return len(self.cluster_ids)

    @property
    def num_clusters(self) -> int:
        return self.total_clusters

    def cluster_labels(self) -> List[int]:
        """按发现顺序排列的簇ID"""
        return list(range(FIRST_CLUSTER, FIRST_CLUSTER + self.total_clusters))

    def members(self, cluster_id: int) -> List[int]:
        """属于指定簇的对象索引"""
        return np.flatnonzero(self.cluster_ids == cluster_id).tolist()

    def noise_indices(self) -> List[int]:
        return self.members(NOISE)

    def cluster_sizes(self) -> Dict[int, int]:
        """簇ID -> 簇大小"""
        return {label: int(np.sum(self.cluster_ids == label))
                for label in self.cluster_labels()}

    def is_medoid(self, index: int) -> bool:
        return index in self.medoid_ids

    def medoid_of(self, cluster_id: int) -> int:
        """
        获取指定簇的代表点

        Args:
            cluster_id: 簇ID（>= FIRST_CLUSTER）

        Returns:
            代表点索引
        """
        k = cluster_id - FIRST_CLUSTER
        if k < 0 or k >= len(self.medoid_ids):
            raise KeyError(f"不存在的簇ID: {cluster_id}")
        return self.medoid_ids[k]

    def to_cluster_list(self) -> List[List[int]]:
        """每个簇的成员列表，顺序与medoid_ids一致，不含噪声"""
        return [self.members(label) for label in self.cluster_labels()]

    def to_labels(self) -> np.ndarray:
        """
        转换为scikit-learn风格的标签

        Returns:
            簇编号从0开始，噪声为-1
        """
        labels = self.cluster_ids - FIRST_CLUSTER
        labels[self.cluster_ids < FIRST_CLUSTER] = -1
        return labels

    def get_cluster_stats(self) -> Dict[str, Any]:
        """
        获取聚类统计信息

        Returns:
            包含聚类统计信息的字典
        """
        return {
            'n_clusters': self.total_clusters,
            'n_noise': int(np.sum(self.cluster_ids == NOISE)),
            'n_points': self.num_objects,
            'cluster_sizes': self.cluster_sizes(),
            'medoids': list(self.medoid_ids),
        }

    def to_dataframe(self) -> pd.DataFrame:
        """每个对象一行：索引、标签、是否噪声、是否代表点"""
        return pd.DataFrame({
            'index': np.arange(self.num_objects),
            'cluster_id': self.cluster_ids,
            'is_noise': self.cluster_ids == NOISE,
            'is_medoid': np.isin(np.arange(self.num_objects), self.medoid_ids),
        })

    def to_dict(self) -> Dict[str, Any]:
        """可JSON序列化的表示"""
        return {
            'cluster_ids': self.cluster_ids.tolist(),
            'medoid_ids': list(self.medoid_ids),
            'total_clusters': self.total_clusters,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Partition':
        return cls(
            cluster_ids=np.asarray(data['cluster_ids']),
            medoid_ids=list(data.get('medoid_ids', [])),
            total_clusters=int(data.get('total_clusters', 0)),
        )

"""
聚类配置
DBSCAN运行参数的加载、校验与保存
"""

import json
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict

from .clustering.dbscan import validate_parameters
from .clustering.metrics import get_metric


@dataclass
class ClusteringConfig:
    """DBSCAN运行参数"""

    epsilon: float = 0.5  # 邻域半径
    min_points: int = 5  # 核心点的最小邻域大小（含自身）
    metric: str = 'euclidean'  # 已注册的度量名称
    precompute: bool = False  # 是否预计算距离矩阵

    def validate(self) -> 'ClusteringConfig':
        """校验参数，不合法时抛出InvalidArgumentError"""
        validate_parameters(self.epsilon, self.min_points)
        get_metric(self.metric)
        return self

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ClusteringConfig':
        """
        从字典创建配置，未知字段被忽略

        Args:
            data: 配置字典

        Returns:
            校验后的配置
        """
        known = {f.name for f in fields(cls)}
        config = cls(**{k: v for k, v in data.items() if k in known})
        return config.validate()

    @classmethod
    def from_json(cls, path: str) -> 'ClusteringConfig':
        with open(path, 'r', encoding='utf-8') as f:
            return cls.from_dict(json.load(f))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def save_json(self, path: str) -> None:
        output_path = Path(path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)

    def update(self, **overrides) -> 'ClusteringConfig':
        """用非None的值覆盖配置（命令行参数优先于配置文件）"""
        data = self.to_dict()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return self.from_dict(data)

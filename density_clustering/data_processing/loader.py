"""
数据加载与结果保存
从CSV读取待聚类的点，并把划分结果写到磁盘
"""

import json
import warnings
from pathlib import Path
from typing import List, Optional

import numpy as np
import pandas as pd

from ..clustering.partition import Partition


def load_points_csv(file_path: str, columns: Optional[List[str]] = None,
                    nrows: Optional[int] = None) -> np.ndarray:
    """
    从CSV文件加载点数据

    Args:
        file_path: CSV文件路径（需要表头）
        columns: 作为坐标的列名，默认使用所有数值列
        nrows: 限制加载的行数

    Returns:
        形状为(n_samples, n_features)的numpy数组
    """
    df = pd.read_csv(file_path, nrows=nrows)

    if columns:
        missing = [c for c in columns if c not in df.columns]
        if missing:
            raise ValueError(f"CSV中缺少列: {missing}")
        df = df[columns]
    else:
        df = df.select_dtypes(include=[np.number])

    if df.shape[1] == 0:
        raise ValueError(f"文件 {file_path} 中没有可用的数值列")

    df = df.apply(pd.to_numeric, errors='coerce')
    n_before = len(df)
    df = df.dropna()
    if len(df) < n_before:
        warnings.warn(f"丢弃了 {n_before - len(df)} 行含缺失值或非数值的数据")

    return df.to_numpy(dtype=np.float64)


def save_partition(partition: Partition, output_path: str,
                   format: str = 'csv') -> Path:
    """
    保存聚类划分结果

    Args:
        partition: 聚类划分结果
        output_path: 输出文件路径（后缀按格式替换）
        format: 输出格式 ('csv', 'json', 'pickle')

    Returns:
        实际写入的文件路径
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    if format == 'csv':
        target = output_path.with_suffix('.csv')
        partition.to_dataframe().to_csv(target, index=False)
    elif format == 'json':
        target = output_path.with_suffix('.json')
        with open(target, 'w', encoding='utf-8') as f:
            json.dump(partition.to_dict(), f, indent=2)
    elif format == 'pickle':
        target = output_path.with_suffix('.pkl')
        pd.to_pickle(partition, target)
    else:
        raise ValueError(f"不支持的格式: {format}")

    return target


def load_partition(file_path: str) -> Partition:
    """
    读取save_partition写出的JSON或pickle结果

    Args:
        file_path: 结果文件路径

    Returns:
        聚类划分结果
    """
    path = Path(file_path)

    if path.suffix == '.json':
        with open(path, 'r', encoding='utf-8') as f:
            return Partition.from_dict(json.load(f))
    if path.suffix == '.pkl':
        return pd.read_pickle(path)

    raise ValueError(f"不支持的格式: {path.suffix}")

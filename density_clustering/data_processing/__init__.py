"""
数据处理模块
点数据的加载和聚类结果的保存
"""

from .loader import load_points_csv, save_partition, load_partition

__all__ = [
    'load_points_csv',
    'save_partition',
    'load_partition'
]

"""
性能分析模块
DBSCAN运行的耗时、内存和查询开销分析
"""

from .memory_profiler import MemoryProfiler, MemorySnapshot
from .time_profiler import TimeProfiler, TimeMeasurement
from .performance_analyzer import ClusteringProfile, profile_clustering, compare_with_reference

__all__ = [
    'MemoryProfiler',
    'MemorySnapshot',
    'TimeProfiler',
    'TimeMeasurement',
    'ClusteringProfile',
    'profile_clustering',
    'compare_with_reference'
]

"""
内存分析器
用psutil监控聚类过程中的进程内存
"""

import os
import time
import tracemalloc
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd
import psutil


@dataclass
class MemorySnapshot:
    """内存快照"""
    label: str
    timestamp: float
    memory_usage_mb: float
    peak_memory_mb: float
    traced_peak_mb: float = 0.0


class MemoryProfiler:
    """内存分析器"""

    def __init__(self, track_detailed: bool = False, verbose: bool = False):
        """
        Args:
            track_detailed: 是否用tracemalloc跟踪Python对象分配峰值
            verbose: 是否打印每个快照
        """
        self.track_detailed = track_detailed
        self.verbose = verbose
        self.process = psutil.Process(os.getpid())
        self.snapshots: List[MemorySnapshot] = []
        self.start_time: Optional[float] = None
        self.peak_memory = 0.0

    def start(self) -> None:
        """开始内存分析"""
        self.start_time = time.time()
        self.snapshots.clear()
        self.peak_memory = 0.0

        if self.track_detailed and not tracemalloc.is_tracing():
            tracemalloc.start()

    def stop(self) -> None:
        """停止内存分析"""
        if self.track_detailed and tracemalloc.is_tracing():
            tracemalloc.stop()

    def __enter__(self) -> 'MemoryProfiler':
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()

    def take_snapshot(self, label: str = "") -> MemorySnapshot:
        """
        拍摄内存快照

        Args:
            label: 快照标签

        Returns:
            内存快照对象
        """
        current_time = time.time() - self.start_time if self.start_time else 0.0
        memory_usage_mb = self.process.memory_info().rss / 1024 / 1024
        self.peak_memory = max(self.peak_memory, memory_usage_mb)

        traced_peak_mb = 0.0
        if self.track_detailed and tracemalloc.is_tracing():
            traced_peak_mb = tracemalloc.get_traced_memory()[1] / 1024 / 1024

        snapshot = MemorySnapshot(
            label=label,
            timestamp=current_time,
            memory_usage_mb=memory_usage_mb,
            peak_memory_mb=self.peak_memory,
            traced_peak_mb=traced_peak_mb
        )
        self.snapshots.append(snapshot)

        if self.verbose and label:
            print(f"[{label}] 内存使用: {memory_usage_mb:.2f} MB, 峰值: {self.peak_memory:.2f} MB")

        return snapshot

    def memory_delta(self) -> Tuple[float, float]:
        """
        首尾快照之间的内存变化

        Returns:
            (内存增长MB, 峰值MB)
        """
        if len(self.snapshots) < 2:
            return 0.0, self.peak_memory
        return (self.snapshots[-1].memory_usage_mb - self.snapshots[0].memory_usage_mb,
                self.peak_memory)

    def analyze_memory_patterns(self) -> Dict[str, Any]:
        """
        分析内存使用模式

        Returns:
            内存模式分析结果，快照不足两个时为空字典
        """
        if len(self.snapshots) < 2:
            return {}

        df = pd.DataFrame([{
            'label': s.label,
            'timestamp': s.timestamp,
            'memory_usage_mb': s.memory_usage_mb
        } for s in self.snapshots])

        return {
            'avg_memory_usage_mb': float(df['memory_usage_mb'].mean()),
            'max_memory_usage_mb': float(df['memory_usage_mb'].max()),
            'min_memory_usage_mb': float(df['memory_usage_mb'].min()),
            'total_memory_growth_mb': float(df['memory_usage_mb'].iloc[-1] - df['memory_usage_mb'].iloc[0]),
            'memory_usage_over_time': df.to_dict('records')
        }

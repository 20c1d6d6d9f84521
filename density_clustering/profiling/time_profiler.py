"""
时间性能分析器
记录聚类各阶段的耗时，并可用cProfile统计热点函数
"""

import cProfile
import io
import pstats
import time
import warnings
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np


@dataclass
class TimeMeasurement:
    """时间测量结果"""
    name: str
    start_time: float
    end_time: Optional[float] = None
    duration: Optional[float] = None
    children: List['TimeMeasurement'] = field(default_factory=list)

    def stop(self) -> float:
        """停止计时并返回持续时间"""
        self.end_time = time.perf_counter()
        self.duration = self.end_time - self.start_time
        return self.duration


class TimeProfiler:
    """时间性能分析器"""

    def __init__(self, enable_profiling: bool = False):
        """
        Args:
            enable_profiling: profile_function()是否同时启用cProfile
        """
        self.enable_profiling = enable_profiling
        self.measurements: List[TimeMeasurement] = []
        self.current_stack: List[TimeMeasurement] = []
        self.timings: Dict[str, List[float]] = defaultdict(list)
        self.profiler: Optional[cProfile.Profile] = None

    def start(self, name: str) -> TimeMeasurement:
        """开始一个（可嵌套的）计时阶段"""
        measurement = TimeMeasurement(name=name, start_time=time.perf_counter())

        if self.current_stack:
            self.current_stack[-1].children.append(measurement)
        else:
            self.measurements.append(measurement)

        self.current_stack.append(measurement)
        return measurement

    def stop(self, name: Optional[str] = None) -> Optional[float]:
        """
        停止计时

        Args:
            name: 要停止的阶段名称；为None时停止最内层阶段。
                  停止外层阶段会一并停止其内部尚未结束的阶段。

        Returns:
            持续时间（秒）
        """
        if not self.current_stack:
            return None

        if name is None:
            measurement = self.current_stack.pop()
        else:
            names = [m.name for m in self.current_stack]
            if name not in names:
                warnings.warn(f"未找到计时阶段 '{name}'")
                return None

            position = len(names) - 1 - names[::-1].index(name)
            while len(self.current_stack) > position + 1:
                inner = self.current_stack.pop()
                self.timings[inner.name].append(inner.stop())
            measurement = self.current_stack.pop()

        duration = measurement.stop()
        self.timings[measurement.name].append(duration)
        return duration

    def profile_function(self, func: Callable, *args, **kwargs) -> Tuple[Any, Dict[str, Any]]:
        """
        分析函数的执行时间

        Returns:
            (函数结果, 性能分析结果)
        """
        if self.enable_profiling:
            self.profiler = cProfile.Profile()
            self.profiler.enable()

        name = getattr(func, '__name__', repr(func))
        self.start(name)
        try:
            result = func(*args, **kwargs)
        finally:
            self.stop(name)
            if self.profiler is not None:
                self.profiler.disable()

        analysis = {
            'function_name': name,
            'execution_time': self.timings[name][-1],
            'n_calls': len(self.timings[name]),
        }
        if self.profiler is not None:
            analysis['top_functions'] = self.top_functions()

        return result, analysis

    def top_functions(self, limit: int = 10) -> List[Dict[str, Any]]:
        """按累计耗时排序的cProfile热点函数"""
        if self.profiler is None:
            return []

        stats = pstats.Stats(self.profiler, stream=io.StringIO())
        rows = []
        for (filename, lineno, funcname), (cc, ncalls, tottime, cumtime, _) in stats.stats.items():
            rows.append({
                'function': f"{filename}:{lineno}({funcname})",
                'ncalls': ncalls,
                'tottime': tottime,
                'cumtime': cumtime,
            })

        rows.sort(key=lambda r: r['cumtime'], reverse=True)
        return rows[:limit]

    def get_summary(self) -> Dict[str, Dict[str, float]]:
        """
        汇总各阶段耗时

        Returns:
            阶段名称 -> {total, avg, std, n_calls}
        """
        return {
            name: {
                'total': float(np.sum(times)),
                'avg': float(np.mean(times)),
                'std': float(np.std(times)),
                'n_calls': len(times),
            }
            for name, times in self.timings.items()
        }

#!/usr/bin/env python3
"""
运行DBSCAN密度聚类
加载点数据、聚类、保存结果并可视化
"""

import sys
from pathlib import Path

# 添加项目根目录到Python路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import argparse
import json
from typing import Any, Dict, List, Optional

import numpy as np
from sklearn.datasets import make_moons

from density_clustering.clustering.partition import Partition
from density_clustering.config import ClusteringConfig
from density_clustering.data_processing.loader import load_points_csv, save_partition
from density_clustering.profiling.performance_analyzer import ClusteringProfile, profile_clustering
from density_clustering.visualization.plot_clusters import ClusterVisualizer

import matplotlib.pyplot as plt


def load_data(data_path: Optional[str], columns: Optional[List[str]] = None,
              demo_size: int = 300) -> np.ndarray:
    """
    加载点数据

    Args:
        data_path: CSV文件路径；为None时生成双月牙演示数据
        columns: 坐标列名
        demo_size: 演示数据点数

    Returns:
        点数据
    """
    print("=" * 60)
    print("数据加载")
    print("=" * 60)

    if data_path is None:
        points, _ = make_moons(n_samples=demo_size, noise=0.06, random_state=0)
        print(f"生成了 {len(points)} 个双月牙演示点")
    else:
        points = load_points_csv(data_path, columns=columns)
        print(f"从 {data_path} 加载了 {len(points)} 个点，维度 {points.shape[1]}")

    if len(points) == 0:
        raise ValueError("没有加载到任何点数据")

    return points


def run_clustering(points: np.ndarray, config: ClusteringConfig) -> Dict[str, Any]:
    """
    运行DBSCAN聚类

    Args:
        points: 点数据
        config: 聚类配置

    Returns:
        聚类结果和性能数据
    """
    print("\n" + "=" * 60)
    print("运行DBSCAN聚类")
    print("=" * 60)

    print(f"算法参数:")
    print(f"  epsilon (邻域半径): {config.epsilon}")
    print(f"  min_points (最小邻域大小): {config.min_points}")
    print(f"  metric (距离度量): {config.metric}")
    print(f"  precompute (预计算距离矩阵): {config.precompute}")
    print(f"  数据点数量: {len(points)}")

    partition, profile = profile_clustering(
        points,
        epsilon=config.epsilon,
        min_points=config.min_points,
        metric=config.metric,
        precompute=config.precompute
    )

    stats = partition.get_cluster_stats()

    print(f"\n聚类结果:")
    print(f"  聚类数量: {stats['n_clusters']}")
    print(f"  噪声点数量: {stats['n_noise']}")

    if stats['cluster_sizes']:
        print(f"  聚类大小分布:")
        for label, size in list(stats['cluster_sizes'].items())[:10]:
            print(f"    聚类 {label}: {size} 个点 (代表点 {partition.medoid_of(label)})")
        if len(stats['cluster_sizes']) > 10:
            print(f"    ... 还有 {len(stats['cluster_sizes']) - 10} 个聚类")

    print(f"\n性能统计:")
    print(f"  执行时间: {profile.execution_time:.4f} 秒")
    print(f"  邻域查询次数: {profile.n_queries}")
    print(f"  距离计算次数: {profile.n_distance_evaluations}")
    print(f"  内存使用: {profile.memory_usage_mb:.2f} MB")

    return {
        'config': config,
        'partition': partition,
        'profile': profile
    }


def visualize_results(points: np.ndarray, result: Dict[str, Any],
                      output_dir: str) -> None:
    """
    可视化聚类结果

    Args:
        points: 点数据
        result: 聚类结果
        output_dir: 输出目录
    """
    print("\n" + "=" * 60)
    print("可视化聚类结果")
    print("=" * 60)

    if points.ndim != 2 or points.shape[1] != 2:
        print(f"数据维度为 {points.shape[1] if points.ndim == 2 else 1}，跳过二维可视化")
        return

    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    config: ClusteringConfig = result['config']
    partition: Partition = result['partition']
    visualizer = ClusterVisualizer(figsize=(10, 8))

    fig = visualizer.plot_clusters_2d(
        points, partition,
        title=f"DBSCAN聚类结果 (epsilon={config.epsilon}, min_points={config.min_points})",
        save_path=str(output_path / "dbscan_clusters_2d.png")
    )
    plt.close(fig)

    fig = visualizer.plot_cluster_sizes(
        partition,
        save_path=str(output_path / "dbscan_cluster_sizes.png")
    )
    plt.close(fig)


def save_results(result: Dict[str, Any], output_dir: str) -> None:
    """
    保存聚类结果

    Args:
        result: 聚类结果
        output_dir: 输出目录
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    config: ClusteringConfig = result['config']
    partition: Partition = result['partition']
    profile: ClusteringProfile = result['profile']
    stats = partition.get_cluster_stats()

    result_file = output_path / "dbscan_results.json"
    serializable_result = {
        'algorithm': 'DBSCAN',
        'parameters': config.to_dict(),
        'results': {
            'n_clusters': stats['n_clusters'],
            'n_noise': stats['n_noise'],
            'cluster_sizes': {str(k): v for k, v in stats['cluster_sizes'].items()},
            'medoids': stats['medoids']
        },
        'performance': profile.to_dict()
    }

    with open(result_file, 'w', encoding='utf-8') as f:
        json.dump(serializable_result, f, indent=2, ensure_ascii=False, default=str)

    labels_file = save_partition(partition, str(output_path / "dbscan_labels"), format='csv')

    summary_file = output_path / "dbscan_summary.txt"
    with open(summary_file, 'w', encoding='utf-8') as f:
        f.write("DBSCAN聚类结果摘要\n")
        f.write("=" * 50 + "\n\n")

        f.write("算法参数:\n")
        for key, value in config.to_dict().items():
            f.write(f"  {key}: {value}\n")

        f.write("\n聚类结果:\n")
        f.write(f"  聚类数量: {stats['n_clusters']}\n")
        f.write(f"  噪声点数量: {stats['n_noise']}\n")
        f.write(f"  代表点: {stats['medoids']}\n")

        f.write("\n性能统计:\n")
        f.write(f"  执行时间: {profile.execution_time:.4f} 秒\n")
        f.write(f"  邻域查询次数: {profile.n_queries}\n")
        f.write(f"  距离计算次数: {profile.n_distance_evaluations}\n")

    print(f"结果已保存到: {result_file}")
    print(f"标签已保存到: {labels_file}")
    print(f"摘要已保存到: {summary_file}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='运行DBSCAN密度聚类')
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument('--data', type=str,
                        help='点数据CSV文件路径（需要表头）')
    source.add_argument('--demo', action='store_true',
                        help='使用双月牙演示数据')
    parser.add_argument('--columns', type=str, nargs='+',
                        help='作为坐标的列名（默认: 所有数值列）')
    parser.add_argument('--config', type=str,
                        help='JSON配置文件路径，命令行参数优先')
    parser.add_argument('--eps', type=float,
                        help='邻域半径（默认: 0.5）')
    parser.add_argument('--min-points', type=int,
                        help='核心点的最小邻域大小（默认: 5）')
    parser.add_argument('--metric', type=str,
                        choices=['euclidean', 'manhattan', 'absolute', 'haversine'],
                        help='距离度量方式（默认: euclidean）')
    parser.add_argument('--precompute', action='store_true', default=None,
                        help='预计算完整距离矩阵')
    parser.add_argument('--output-dir', type=str, default='./results/dbscan',
                        help='输出目录（默认: ./results/dbscan）')
    parser.add_argument('--no-visualize', action='store_true',
                        help='不生成可视化图表')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """主函数"""
    args = build_parser().parse_args(argv)

    try:
        print("DBSCAN密度聚类")
        print("=" * 60)

        config = ClusteringConfig.from_json(args.config) if args.config else ClusteringConfig()
        config = config.update(
            epsilon=args.eps,
            min_points=args.min_points,
            metric=args.metric,
            precompute=args.precompute
        )

        # 1. 加载数据
        points = load_data(None if args.demo else args.data, columns=args.columns)

        # 2. 运行聚类
        result = run_clustering(points, config)

        # 3. 可视化结果
        if not args.no_visualize:
            visualize_results(points, result, args.output_dir)

        # 4. 保存结果
        save_results(result, args.output_dir)

        print("\n" + "=" * 60)
        print("DBSCAN聚类完成")
        print("=" * 60)

    except Exception as e:
        print(f"错误: {e}")
        import traceback
        traceback.print_exc()
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
聚类结果可视化
二维点集的聚类散点图和簇大小分布
"""

from typing import Optional, Tuple

import matplotlib

matplotlib.use('Agg')  # 非交互式后端
import matplotlib.pyplot as plt
import numpy as np
from scipy.spatial import ConvexHull, QhullError

from ..clustering.partition import NOISE, Partition


class ClusterVisualizer:
    """聚类可视化器"""

    def __init__(self, figsize: Tuple[int, int] = (12, 10),
                 colormap: str = 'tab20'):
        """
        初始化可视化器

        Args:
            figsize: 图形大小
            colormap: 颜色映射
        """
        self.figsize = figsize
        self.colormap = colormap
        self.cmap = matplotlib.colormaps[colormap]

    def plot_clusters_2d(self, points: np.ndarray, partition: Partition,
                         title: str = "DBSCAN聚类结果",
                         save_path: Optional[str] = None,
                         show_noise: bool = True,
                         show_hulls: bool = True,
                         alpha: float = 0.6,
                         s: float = 10.0) -> plt.Figure:
        """
        绘制2D聚类结果

        Args:
            points: 点数据，形状为(n, 2)
            partition: 聚类划分结果
            title: 图表标题
            save_path: 保存路径
            show_noise: 是否显示噪声点
            show_hulls: 是否绘制簇的凸包
            alpha: 透明度
            s: 点的大小

        Returns:
            matplotlib图形对象
        """
        points = np.asarray(points, dtype=np.float64)
        if points.ndim != 2 or points.shape[1] < 2:
            raise ValueError(f"只能绘制二维点，实际形状: {points.shape}")

        labels = partition.cluster_ids
        cluster_labels = partition.cluster_labels()
        colors = self.cmap(np.linspace(0, 1, max(len(cluster_labels), 1)))

        fig, ax = plt.subplots(figsize=self.figsize)

        if show_noise:
            noise_points = points[labels == NOISE]
            if len(noise_points):
                ax.scatter(noise_points[:, 0], noise_points[:, 1], c='gray',
                           marker='x', s=s * 0.5, alpha=alpha * 0.5, label='噪声点')

        for color, label in zip(colors, cluster_labels):
            cluster_points = points[labels == label]

            ax.scatter(cluster_points[:, 0], cluster_points[:, 1],
                       c=[color], label=f'聚类 {label}', marker='o',
                       s=s, alpha=alpha, edgecolors='w', linewidths=0.5)

            # 簇的代表点
            medoid = points[partition.medoid_of(label)]
            ax.scatter([medoid[0]], [medoid[1]], c=[color], marker='*',
                       s=s * 15, edgecolors='k', linewidths=0.8)

            if show_hulls and len(cluster_points) > 3:
                try:
                    hull = ConvexHull(cluster_points[:, :2])
                except QhullError:
                    # 共线等退化情形
                    continue
                hull_points = cluster_points[hull.vertices]
                hull_points = np.vstack([hull_points, hull_points[0]])
                ax.plot(hull_points[:, 0], hull_points[:, 1],
                        color=color, alpha=0.3, linewidth=1, linestyle='--')

        ax.set_title(title, fontsize=14, fontweight='bold')
        ax.set_xlabel('X')
        ax.set_ylabel('Y')
        ax.grid(True, alpha=0.3)

        # 只显示前15个图例项
        handles, legend_labels = ax.get_legend_handles_labels()
        if handles:
            ax.legend(handles[:15], legend_labels[:15], loc='upper right', fontsize=8)

        stats = partition.get_cluster_stats()
        stats_text = f"聚类数: {stats['n_clusters']}\n噪声点: {stats['n_noise']}\n总点数: {stats['n_points']}"
        ax.text(0.02, 0.98, stats_text, transform=ax.transAxes,
                fontsize=10, verticalalignment='top',
                bbox=dict(boxstyle='round', facecolor='wheat', alpha=0.8))

        fig.tight_layout()

        if save_path:
            fig.savefig(save_path, dpi=150, bbox_inches='tight')
            print(f"聚类图已保存到: {save_path}")

        return fig

    def plot_cluster_sizes(self, partition: Partition,
                           title: str = "聚类大小分布",
                           save_path: Optional[str] = None) -> plt.Figure:
        """
        绘制簇大小柱状图（噪声单列一栏）

        Args:
            partition: 聚类划分结果
            title: 图表标题
            save_path: 保存路径

        Returns:
            matplotlib图形对象
        """
        sizes = partition.cluster_sizes()
        names = [str(label) for label in sizes] + ['噪声']
        values = list(sizes.values()) + [len(partition.noise_indices())]
        colors = list(self.cmap(np.linspace(0, 1, max(len(sizes), 1))))[:len(sizes)] + ['gray']

        fig, ax = plt.subplots(figsize=self.figsize)
        bars = ax.bar(range(len(values)), values, color=colors)

        for bar, value in zip(bars, values):
            ax.text(bar.get_x() + bar.get_width() / 2., bar.get_height(),
                    f'{value}', ha='center', va='bottom', fontsize=8)

        ax.set_xticks(range(len(names)))
        ax.set_xticklabels(names, rotation=45)
        ax.set_xlabel('聚类ID')
        ax.set_ylabel('点数')
        ax.set_title(title, fontsize=14, fontweight='bold')
        fig.tight_layout()

        if save_path:
            fig.savefig(save_path, dpi=150, bbox_inches='tight')
            print(f"聚类大小分布图已保存到: {save_path}")

        return fig

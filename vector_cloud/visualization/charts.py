"""
Plotly charts that accompany the point cloud.
"""

from typing import Optional

import numpy as np
import plotly.graph_objects as go

import config


class VarianceChartBuilder:
    """
    Bar chart of how much variance each principal component explains.

    A low total means the 3D view flattens a lot of structure; distances
    in the cloud should then be read loosely.
    """

    COLORS = {
        "component": "#667eea",
        "cumulative": "#10b981",
    }

    AXIS_NAMES = ("PC1 (x)", "PC2 (y)", "PC3 (z)")

    def __init__(self, height: int = 260, width: Optional[int] = None):
        self.height = height
        self.width = width

    def build(self, explained_variance_ratio: np.ndarray) -> go.Figure:
        """
        Build the chart.

        Args:
            explained_variance_ratio: Variance share per component, length 3

        Returns:
            Plotly Figure object
        """
        ratios = np.asarray(explained_variance_ratio, dtype=np.float64)[:config.PCA_N_COMPONENTS]
        names = list(self.AXIS_NAMES[:len(ratios)])
        cumulative = np.cumsum(ratios)

        fig = go.Figure()
        fig.add_trace(go.Bar(
            x=names,
            y=ratios * 100,
            marker=dict(color=self.COLORS["component"]),
            text=[f"{r * 100:.1f}%" for r in ratios],
            textposition="outside",
            hovertemplate="%{x}: %{y:.1f}%<extra></extra>",
            name="Component",
        ))
        fig.add_trace(go.Scatter(
            x=names,
            y=cumulative * 100,
            mode="lines+markers",
            line=dict(color=self.COLORS["cumulative"], width=2),
            hovertemplate="Cumulative: %{y:.1f}%<extra></extra>",
            name="Cumulative",
        ))

        fig.update_layout(
            height=self.height,
            width=self.width,
            template="plotly_dark",
            paper_bgcolor="rgba(0,0,0,0)",
            plot_bgcolor="rgba(17,17,17,0.8)",
            showlegend=False,
            margin=dict(l=20, r=20, t=30, b=20),
            yaxis=dict(
                title="Explained variance (%)",
                range=[0, 105],
                showgrid=False,
            ),
            xaxis=dict(showgrid=False),
        )
        return fig

"""Export module for dashboard output."""

from __future__ import annotations

from cutplan.export.chart import build_chart, render_chart
from cutplan.export.formatters import DashboardFormatter

__all__ = ["DashboardFormatter", "build_chart", "render_chart"]

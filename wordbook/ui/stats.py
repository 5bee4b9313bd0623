"""
Stats View
----------

Grouped bar chart of words added and updated per day.
"""

from typing import Optional

import flet as ft

from ..controllers import StatsPresenter
from ..models import DateStats
from ..services import WordStore
from .theme import DesignTokens, build_header

CHART_HEIGHT = 300
BAR_WIDTH = 14


class StatsView:
    """Renders StatsPresenter data as bars built from containers."""

    def __init__(self, page: ft.Page, store: WordStore) -> None:
        self.page = page
        self.presenter = StatsPresenter(store)
        self._chart: Optional[ft.Row] = None
        self._legend: Optional[ft.Row] = None
        self._error_text: Optional[ft.Text] = None
        self._container = self._build_view()

    @property
    def container(self) -> ft.Container:
        """Get the main container for this view."""
        return self._container

    def did_mount(self) -> None:
        self.page.run_task(self._load)

    def _build_view(self) -> ft.Container:
        self._error_text = ft.Text("", color=DesignTokens.ACCENT_DANGER, visible=False)
        self._legend = ft.Row(spacing=DesignTokens.SPACING_MD)
        self._chart = ft.Row(
            spacing=DesignTokens.SPACING_LG,
            vertical_alignment=ft.CrossAxisAlignment.END,
            scroll=ft.ScrollMode.AUTO,
        )

        return ft.Container(
            content=ft.Column(
                controls=[
                    build_header("Statistics", "Words added and updated per day"),
                    self._error_text,
                    self._legend,
                    ft.Container(
                        content=self._chart,
                        height=CHART_HEIGHT + 40,
                        padding=DesignTokens.SPACING_MD,
                        border_radius=DesignTokens.RADIUS_MD,
                        bgcolor=DesignTokens.BG_CARD,
                    ),
                ],
                spacing=DesignTokens.SPACING_MD,
            ),
            expand=True,
            padding=DesignTokens.SPACING_LG,
        )

    async def _load(self) -> None:
        await self.presenter.load()
        self._render()

    def _render(self) -> None:
        self._error_text.value = self.presenter.error or ""
        self._error_text.visible = bool(self.presenter.error)

        series = self.presenter.series()
        self._legend.controls = [
            ft.Row(
                controls=[
                    ft.Container(width=12, height=12, bgcolor=color, border_radius=2),
                    ft.Text(label, size=12, color=DesignTokens.TEXT_SECONDARY),
                ],
                spacing=6,
            )
            for _, label, color in series
        ]

        if self.presenter.stats:
            scale = CHART_HEIGHT / max(self.presenter.max_value(), 1)
            self._chart.controls = [self._build_group(stat, series, scale) for stat in self.presenter.stats]
        else:
            self._chart.controls = [ft.Text("No activity yet.", color=DesignTokens.TEXT_TERTIARY)]
        self.page.update()

    @staticmethod
    def _build_group(stat: DateStats, series, scale: float) -> ft.Column:
        bars = []
        for key, label, color in series:
            value = getattr(stat, key) or 0
            bars.append(ft.Container(
                width=BAR_WIDTH,
                height=max(value * scale, 1),
                bgcolor=color,
                border_radius=ft.BorderRadius.only(top_left=3, top_right=3),
                tooltip=f"{label}: {value}",
            ))

        return ft.Column(
            controls=[
                ft.Row(bars, spacing=2, vertical_alignment=ft.CrossAxisAlignment.END),
                ft.Text(stat.date, size=11, color=DesignTokens.TEXT_TERTIARY),
            ],
            horizontal_alignment=ft.CrossAxisAlignment.CENTER,
            alignment=ft.MainAxisAlignment.END,
            spacing=4,
        )

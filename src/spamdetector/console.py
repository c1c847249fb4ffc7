# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .schemas import SpamPrediction

ASCII_BANNER = r"""
  ____                        ____       _            _
 / ___| _ __   __ _ _ __ ___ |  _ \  ___| |_ ___  ___| |_
 \___ \| '_ \ / _` | '_ ` _ \| | | |/ _ \ __/ _ \/ __| __|
  ___) | |_) | (_| | | | | | | |_| |  __/ ||  __/ (__| |_
 |____/| .__/ \__,_|_| |_| |_|____/ \___|\__\___|\___|\__|
       |_|
"""


@dataclass
class MLConsole:
    enabled: bool = True

    def __post_init__(self) -> None:
        self._console = Console(color_system="auto", soft_wrap=True, quiet=not self.enabled)

    def banner(self) -> None:
        self._console.print(Panel.fit(ASCII_BANNER.strip("\n"), title="Spam Detector", border_style="cyan"))

    def info(self, text: str) -> None:
        self._console.print(f"[bold cyan]INFO[/bold cyan] {text}")

    def warn(self, text: str) -> None:
        self._console.print(f"[bold yellow]WARN[/bold yellow] {text}")

    def error(self, text: str) -> None:
        self._console.print(f"[bold red]ERROR[/bold red] {text}")

    def success(self, text: str) -> None:
        self._console.print(f"[bold green]OK[/bold green] {text}")

    def rule(self) -> None:
        self._console.rule(style="dim")

    def metrics_table(self, metrics: Mapping[str, float], *, title: str) -> None:
        table = Table(title=title, show_lines=True)
        table.add_column("Metric", style="bold")
        table.add_column("Value", justify="right")
        for key in sorted(metrics.keys()):
            table.add_row(key, f"{float(metrics[key]):.2%}")
        self._console.print(table)

    def prediction_panel(self, prediction: SpamPrediction) -> None:
        verdict = "[bold red]SPAM[/bold red]" if prediction.is_spam else "[bold green]NOT SPAM[/bold green]"
        lines = [
            f"Result: {verdict}",
            f"Spam probability: {prediction.probability:.2%}",
            f"Score: {prediction.score:.2f}",
        ]
        self._console.print(Panel.fit("\n".join(lines), border_style="magenta"))

    def ask(self, prompt: str) -> str:
        return self._console.input(f"[bold]{prompt}[/bold] ")

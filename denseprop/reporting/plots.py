"""Headless-safe training curve plots."""

from __future__ import annotations

from pathlib import Path
from typing import List, Mapping, Tuple


class PlotAdapter:
    """Collect reported step errors and optionally draw them with matplotlib."""

    def __init__(self, run_dir: str | Path, enable_plots: bool = False):
        self.enable_plots = enable_plots
        self.run_dir = Path(run_dir)
        self._history: List[Tuple[int, float]] = []
        if self.enable_plots:
            self.run_dir.mkdir(parents=True, exist_ok=True)

    def on_step(self, step: int, metrics: Mapping[str, float]) -> None:
        if not self.enable_plots:
            return
        self._history.append((int(step), float(metrics.get("error", 0.0))))

    def close(self) -> str:
        """Write ``error.png`` and return its path (empty when nothing was drawn)."""

        if not self.enable_plots or not self._history:
            return ""
        import matplotlib

        matplotlib.use("Agg", force=True)
        import matplotlib.pyplot as plt  # imported lazily for headless safety

        steps, errors = zip(*self._history)
        fig, ax = plt.subplots()
        ax.plot(steps, errors)
        ax.set_yscale("log")
        ax.set_xlabel("Step")
        ax.set_ylabel("Mean squared error")
        ax.set_title("Training Curve")
        plot_path = self.run_dir / "error.png"
        fig.savefig(plot_path)
        plt.close(fig)
        return str(plot_path)

    __call__ = on_step


__all__ = ["PlotAdapter"]

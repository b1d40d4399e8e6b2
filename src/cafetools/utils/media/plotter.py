"""
Plotting utilities for cafetools.

This module provides lightweight Matplotlib helpers for visualizing CafeMol
data: time-series curves (Q-score, radius of gyration versus step) and
native contact maps. All helpers share the same save/show behavior and are
used directly by workflows.
"""

from __future__ import annotations
import matplotlib.pyplot as plt
from pathlib import Path
from typing import Optional, Sequence, Union, Mapping, Any

_IMAGE_EXTS = {".png", ".jpg", ".jpeg", ".svg", ".pdf", ".tif", ".tiff", ".bmp"}


# ---------- Helpers ----------
def _save_or_show(
    fig: plt.Figure,
    save_dir: Optional[Union[str, Path]],
    filename: str,
    show_message: bool = True,
) -> None:
    """
    Save a figure to disk or display it interactively.

    If ``save_dir`` has an image extension it is used as the output file;
    otherwise it is treated as a directory and ``filename.png`` is written
    inside it. If ``save_dir`` is ``None``, the figure is shown.
    """
    if save_dir:
        save_path = Path(save_dir)
        if save_path.suffix.lower() in _IMAGE_EXTS:
            save_path.parent.mkdir(parents=True, exist_ok=True)
            out_file = save_path
        else:
            save_path.mkdir(parents=True, exist_ok=True)
            out_file = save_path / f"{filename.replace(' ', '_')}.png"

        fig.savefig(out_file, dpi=300, bbox_inches='tight')
        plt.close(fig)
        if show_message:
            print(f"[Done] saved plot to {out_file}")
    else:
        plt.show()


# ---------- Plots ----------
def single_plot(
    x: Optional[Sequence[float]] = None,
    y: Optional[Sequence[float]] = None,
    *,
    series: Optional[Sequence[Mapping[str, Any]]] = None,
    title: Optional[str] = None,
    xlabel: Optional[str] = None,
    ylabel: Optional[str] = None,
    save: Optional[Union[str, Path]] = None,
    legend: bool = False,
    figsize: tuple[float, float] = (8.0, 3.2),
    plot_type: str = "line",
) -> plt.Figure:
    """
    Create a single plot for one or multiple data series.

    Parameters
    ----------
    x, y : sequence of float, optional
        Data to plot when using the simple API.
    series : sequence of mapping, optional
        Multi-series specification with keys ``x``, ``y`` and optionally
        ``label``, ``marker``, ``linewidth``.
    title, xlabel, ylabel : str, optional
        Plot title and axis labels.
    save : str or Path, optional
        Output directory or file path. If not provided, the plot is shown.
    legend : bool, optional
        Whether to display a legend.
    figsize : tuple of float, optional
        Figure size.
    plot_type : {'line', 'scatter'}, optional
        Type of plot to generate.

    Returns
    -------
    matplotlib.figure.Figure
        The created figure.
    """
    fig, ax = plt.subplots(figsize=figsize)

    def _plot(x, y, label=None, **kwargs):
        if plot_type == "scatter":
            ax.scatter(x, y, label=label, **kwargs)
        else:
            ax.plot(x, y, label=label, **kwargs)

    if series is not None:
        for s in series:
            sx, sy = s.get("x"), s.get("y")
            if sx is None or sy is None:
                continue
            kwargs = {"marker": s.get("marker", "." if plot_type == "scatter" else None)}
            if plot_type != "scatter":
                kwargs["linewidth"] = s.get("linewidth", 1.2)
            _plot(sx, sy, label=s.get("label"), **kwargs)
    else:
        if x is None or y is None:
            raise ValueError("Provide (x, y) or 'series=[...]'.")
        _plot(x, y)

    if title:
        ax.set_title(title)
    if xlabel:
        ax.set_xlabel(xlabel)
    if ylabel:
        ax.set_ylabel(ylabel)
    if legend:
        ax.legend()

    fig.tight_layout()
    _save_or_show(fig, save, title or "single_plot")
    return fig


def contact_map_plot(
    i: Sequence[int],
    j: Sequence[int],
    *,
    title: str = "Native contact map",
    save: Optional[Union[str, Path]] = None,
    figsize: tuple[float, float] = (5.0, 5.0),
    marker_size: float = 4.0,
) -> plt.Figure:
    """
    Draw a symmetric contact map from paired particle indices.

    Each contact ``(i, j)`` is drawn at both ``(i, j)`` and ``(j, i)``.
    """
    i, j = list(i), list(j)
    fig, ax = plt.subplots(figsize=figsize)
    ax.scatter(i + j, j + i, s=marker_size, marker="s", color="black")
    ax.set_aspect("equal")
    ax.set_xlabel("particle index")
    ax.set_ylabel("particle index")
    ax.set_title(title)
    fig.tight_layout()
    _save_or_show(fig, save, title)
    return fig

"""Chart rendering for payoff projections and debt composition."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from typing import Mapping, Sequence

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
import matplotlib.ticker as mticker  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402

from ..logging_config import get_logger  # noqa: E402
from ..models.debt import DebtType  # noqa: E402
from .currency import CURRENCY_SYMBOL  # noqa: E402
from .debts import ProjectionPoint  # noqa: E402

logger = get_logger(__name__)

PALETTE = ["#FF6B00", "#FF8C42", "#FF4444", "#00B86B", "#4C9AFF", "#9C27B0", "#6B7280"]


def _peso_axis(value: float, _pos: int) -> str:
    return f"{CURRENCY_SYMBOL}{value:,.0f}"


def build_payoff_chart(points: Sequence[ProjectionPoint], *, title: str = "Debt Payoff Projection") -> Figure:
    """Line chart of total remaining debt per projected month."""

    fig, ax = plt.subplots(figsize=(9, 5))
    if not points or points[0].total_remaining == 0:
        ax.text(0.5, 0.5, "No outstanding debt", ha="center", va="center", fontsize=14, color="#666")
        ax.axis("off")
        return fig

    months = [p.month for p in points]
    totals = [float(p.total_remaining) for p in points]
    ax.plot(months, totals, color=PALETTE[0], linewidth=2.2, marker="o", markersize=3)
    ax.fill_between(months, totals, color=PALETTE[0], alpha=0.15)
    ax.set_xlabel("Month")
    ax.set_ylabel("Remaining balance")
    ax.set_title(title, fontsize=14, fontweight="bold")
    ax.yaxis.set_major_formatter(mticker.FuncFormatter(_peso_axis))
    ax.set_xlim(0, max(months[-1], 1))
    ax.set_ylim(bottom=0)
    ax.grid(True, alpha=0.3)

    if points[-1].total_remaining > 0:
        ax.annotate(
            f"{CURRENCY_SYMBOL}{points[-1].total_remaining:,.2f} left after {months[-1]} months",
            xy=(months[-1], totals[-1]),
            xytext=(-10, 20),
            textcoords="offset points",
            ha="right",
            fontsize=9,
        )
    fig.tight_layout()
    return fig


def build_debt_type_chart(totals: Mapping[DebtType, Decimal]) -> Figure:
    """Donut chart of remaining balance by debt type."""

    fig, ax = plt.subplots(figsize=(7, 6))
    items = [(debt_type, amount) for debt_type, amount in totals.items() if amount > 0]
    if not items:
        ax.text(0.5, 0.5, "No outstanding debt", ha="center", va="center", fontsize=14, color="#666")
        ax.axis("off")
        return fig

    labels = [DebtType(debt_type).label for debt_type, _ in items]
    sizes = [float(amount) for _, amount in items]
    wedges, _texts, _autotexts = ax.pie(
        sizes,
        labels=None,
        autopct=lambda pct: f"{pct:.1f}%" if pct > 4 else "",
        wedgeprops=dict(width=0.45, edgecolor="white", linewidth=1.5),
        startangle=90,
        colors=[PALETTE[i % len(PALETTE)] for i in range(len(sizes))],
        pctdistance=0.78,
    )
    ax.legend(
        wedges,
        [f"{label}: {CURRENCY_SYMBOL}{size:,.0f}" for label, size in zip(labels, sizes)],
        title="Debt type",
        loc="center left",
        bbox_to_anchor=(1.02, 0.5),
        fontsize=9,
    )
    ax.text(0, 0, f"{CURRENCY_SYMBOL}{sum(sizes):,.0f}", ha="center", va="center", fontsize=16, fontweight="bold")
    ax.axis("equal")
    ax.set_title("Debt by Type", fontsize=14, fontweight="bold")
    fig.tight_layout()
    return fig


def export_png(figure: Figure, output_path: Path) -> Path:
    """Write ``figure`` as PNG and release it."""

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        figure.savefig(output_path, bbox_inches="tight", dpi=100)
    finally:
        plt.close(figure)
    logger.info("Chart exported", extra={"path": str(output_path)})
    return output_path


__all__ = ["build_debt_type_chart", "build_payoff_chart", "export_png"]

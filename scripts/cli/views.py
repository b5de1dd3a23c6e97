"""CLI views: listing, trend series, years and stores."""

from scripts.cli.util import fmt_brl

W = 96


def _title(text: str) -> None:
    print()
    print("=" * W)
    print(f"  {text}".center(W))
    print("=" * W)


def show_listing(report):
    """Print a listing report: one line per row plus the totals line."""
    meta = report.metadata
    _title(meta.entity_name.upper() if meta else "FINANCIAL REPORT")
    if not report.rows:
        print("\n  No entries match the selection.\n")
        return
    print(f"  {'Period':<20} {'Store':<30} {'Revenues':>14} {'Expenses':>14} {'Net':>14}")
    print(f"  {'-'*20} {'-'*30} {'-'*14} {'-'*14} {'-'*14}")
    for row in report.rows:
        marker = "" if row.id is None else f"  [{str(row.id)[:8]}]"
        print(
            f"  {row.period.label:<20} {row.store[:30]:<30} "
            f"{fmt_brl(row.total_revenues):>14} {fmt_brl(row.total_expenses):>14} "
            f"{fmt_brl(row.net_result):>14}{marker}"
        )
    print(f"  {'-'*20} {'-'*30} {'-'*14} {'-'*14} {'-'*14}")
    t = report.totals
    print(
        f"  {'TOTAL':<20} {'':<30} "
        f"{fmt_brl(t.revenue):>14} {fmt_brl(t.expense):>14} {fmt_brl(t.net):>14}"
    )
    print(f"\n  {len(report.rows)} row(s)")
    print()


def show_trend(points, totals):
    """Print the chart series of a trend report."""
    _title("REVENUE x EXPENSE")
    if not points:
        print("\n  No entries match the selection.\n")
        return
    print(f"  {'Period':<12} {'Revenues':>16} {'Expenses':>16} {'Net':>16}")
    print(f"  {'-'*12} {'-'*16} {'-'*16} {'-'*16}")
    for p in points:
        print(f"  {p.label:<12} {fmt_brl(p.revenue):>16} {fmt_brl(p.expense):>16} {fmt_brl(p.net):>16}")
    print(f"  {'-'*12} {'-'*16} {'-'*16} {'-'*16}")
    print(f"  {'TOTAL':<12} {fmt_brl(totals.revenue):>16} {fmt_brl(totals.expense):>16} {fmt_brl(totals.net):>16}")
    print()


def show_values(values, empty_message):
    """Print one value per line."""
    if not values:
        print(f"  {empty_message}")
        return
    for v in values:
        print(f"  {v}")

import logging
from html import escape
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlmodel import Session
from starlette.responses import HTMLResponse

from print_quote.db.session import get_db
from print_quote.models.quote import Quote
from print_quote.services.quote_store import QuoteStore
from print_quote.utils.formatters import (
    discount_amount,
    finishing_name,
    format_price,
    paper_type_name,
    print_color_name,
    product_type_name,
    service_type_name,
    size_name,
)

logger = logging.getLogger(__name__)
router = APIRouter()

_STYLE = """
    body { font-family: Inter, system-ui, -apple-system, 'Segoe UI', Roboto, 'Helvetica Neue', Arial; background:#f3f4f6; padding:24px; }
    .container { max-width:1100px; margin:0 auto; }
    .cards { display:flex; gap:16px; margin-bottom:20px; }
    .card { background:white;padding:20px;border-radius:8px; box-shadow:0 1px 3px rgba(0,0,0,0.06); flex:1 }
    .title { color:#6b7280; font-size:13px }
    .value { font-size:28px; font-weight:700; margin-top:6px }
    table { width:100%; border-collapse:collapse; margin-top:12px; background:white; border-radius:8px; overflow:hidden }
    th, td { padding:12px; text-align:left; border-bottom:1px solid #eef2f7 }
    thead { background:#f9fafb }
    .nav { margin-bottom:18px }
    .nav a { margin-right:12px; color:#2563eb; text-decoration:none }
"""


def _wants_html(request: Request) -> bool:
    return "text/html" in request.headers.get("accept", "")


def _page(title: str, body: str) -> str:
    return f"""<!doctype html>
<html>
<head><meta charset="utf-8" /><title>{title}</title><style>{_STYLE}</style></head>
<body>
  <div class="container">
    <div class="nav"><a href="/admin/summary">Summary</a> <a href="/admin/quotes">Quotes</a></div>
    <h1>{title}</h1>
    {body}
  </div>
</body>
</html>
"""


def _quote_row(q: Quote) -> Dict[str, Any]:
    return {
        "id": q.id,
        "createdAt": q.created_at.isoformat() if q.created_at else None,
        "serviceType": q.specs.service_type.value,
        "productType": q.specs.product_type,
        "quantity": q.specs.quantity,
        "size": q.specs.size,
        "paperType": q.specs.paper_type,
        "printColors": q.specs.print_colors,
        "finishing": list(q.specs.finishing or ["none"]),
        "price": q.price,
        "turnaround": q.turnaround,
        "discountApplied": q.discount_applied,
    }


def _spec_summary(row: Dict[str, Any]) -> str:
    if row["serviceType"] == "logistics":
        return "—"
    finishing = "・".join(finishing_name(f) for f in row["finishing"])
    parts = [size_name(row["size"])] if row["size"] else []
    parts += [paper_type_name(row["paperType"]), print_color_name(row["printColors"]), finishing]
    return " / ".join(parts)


def _discount_cell(row: Dict[str, Any]) -> str:
    discount = discount_amount(row["price"], row["discountApplied"])
    if discount is None:
        return "—"
    return f"{discount['discount_percentage']:.0f}% (-{format_price(discount['discount_amount'])})"


def _render_quotes_html(rows: List[Dict[str, Any]]) -> str:
    body_rows = "".join(
        "<tr>"
        f"<td>{escape(r['id'])}</td>"
        f"<td>{escape(r['createdAt'] or '—')}</td>"
        f"<td>{escape(service_type_name(r['serviceType']))}</td>"
        f"<td>{escape(product_type_name(r['productType']) or '—')}</td>"
        f"<td>{r['quantity']}</td>"
        f"<td>{escape(_spec_summary(r))}</td>"
        f"<td>{format_price(r['price'])}</td>"
        f"<td>{r['turnaround']}日</td>"
        f"<td>{_discount_cell(r)}</td>"
        "</tr>"
        for r in rows
    )
    table = (
        "<table><thead><tr><th>ID</th><th>Created</th><th>Service</th><th>Product</th><th>Qty</th><th>Specs</th>"
        "<th>Price</th><th>Turnaround</th><th>Discount</th></tr></thead>"
        f"<tbody>{body_rows}</tbody></table>"
    )
    return _page("Saved Quotes", table)


def _render_summary_html(summary: Dict[str, Any]) -> str:
    services = "".join(
        f"<li><strong>{escape(service_type_name(k))}</strong>: {v}</li>" for k, v in summary["byService"].items()
    )
    body = f"""
    <div class="cards">
      <div class="card"><div class="title">Saved Quotes</div><div class="value">{summary['totalQuotes']}</div></div>
      <div class="card"><div class="title">Quoted Value</div><div class="value">{format_price(summary['totalValue'])}</div></div>
    </div>
    <h2>By Service</h2>
    <ul>{services}</ul>
"""
    return _page("Quote Summary", body)


@router.get("/quotes")
async def admin_quotes(request: Request, session: Session = Depends(get_db)):
    rows = [_quote_row(q) for q in QuoteStore(session).list()]
    if _wants_html(request):
        return HTMLResponse(content=_render_quotes_html(rows))
    return rows


@router.get("/summary")
async def admin_summary(request: Request, session: Session = Depends(get_db)):
    try:
        totals = QuoteStore(session).summary()
    except Exception as e:
        logger.exception("Failed to compute summary: %s", e)
        raise HTTPException(status_code=500, detail="Failed to compute quote summary")

    summary = {
        "totalQuotes": totals["total_quotes"],
        "totalValue": totals["total_value"],
        "byService": totals["by_service"],
    }
    if _wants_html(request):
        return HTMLResponse(content=_render_summary_html(summary))
    return summary

"""Printable tax invoice as a standalone HTML page.

The page carries the company letterhead, the bill-to block, the line
table and the totals.  Print CSS repeats the table header on every page
and keeps rows from splitting, so long invoices paginate when printed
or saved as PDF from a browser.
"""

from __future__ import annotations

import html
from pathlib import Path

from gstbill.application.document_renderer import DocumentRenderer
from gstbill.domain.exceptions import DocumentRenderError
from gstbill.domain.model.company import CompanyProfile
from gstbill.domain.model.invoice import Invoice
from gstbill.domain.model.party import Party

_STYLES = """
    body { font-family: Helvetica, Arial, sans-serif; color: #1f2933; margin: 0; }
    .invoice { max-width: 800px; margin: 0 auto; padding: 24px; }
    .header { display: flex; justify-content: space-between; border-bottom: 1px solid #333; padding-bottom: 12px; }
    .company h1 { margin: 0 0 6px 0; font-size: 20pt; color: #282828; }
    .company p, .bill-to p { margin: 0; font-size: 10pt; color: #646464; }
    .meta { text-align: right; font-size: 10pt; }
    .meta h2 { margin: 0 0 8px 0; font-size: 12pt; }
    .bill-to { margin: 16px 0; }
    .bill-to h3 { margin: 0 0 4px 0; font-size: 11pt; }
    table.items { width: 100%; border-collapse: collapse; font-size: 9pt; }
    table.items th { background: #2980b9; color: #ffffff; padding: 6px; text-align: left; }
    table.items td { border: 1px solid #d0d7de; padding: 5px 6px; }
    table.items .num { text-align: right; }
    table.items tr { page-break-inside: avoid; }
    thead { display: table-header-group; }
    .totals { margin-left: auto; margin-top: 12px; font-size: 10pt; }
    .totals td { padding: 3px 0 3px 24px; text-align: right; }
    .totals tr.grand td { font-size: 12pt; font-weight: bold; }
    .signature { margin-top: 48px; text-align: right; font-size: 8pt; }
    .footer { margin-top: 12px; text-align: center; font-size: 8pt; }
    @page { size: A4; margin: 14mm; }
"""


def _e(value: object) -> str:
    return html.escape(str(value))


class HtmlInvoiceRenderer(DocumentRenderer):

    def __init__(self, company: CompanyProfile, output_dir: Path) -> None:
        self._company = company
        self._output_dir = output_dir

    def render(self, invoice: Invoice, party: Party) -> Path:
        path = self._output_dir / f"{invoice.invoice_no}.html"
        try:
            self._output_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(self.to_html(invoice, party), encoding="utf-8")
        except OSError as exc:
            raise DocumentRenderError(f"Could not write {path}: {exc}") from exc
        return path

    def to_html(self, invoice: Invoice, party: Party) -> str:
        c = self._company
        rows = "\n".join(
            "<tr>"
            f"<td>{index}</td>"
            f"<td>{_e(item.name)}</td>"
            f"<td>{_e(item.hsn)}</td>"
            f"<td class=\"num\">{item.quantity.value}</td>"
            f"<td class=\"num\">{_e(item.price)}</td>"
            f"<td class=\"num\">{_e(item.tax_rate)}</td>"
            f"<td class=\"num\">{_e(item.total_tax)}</td>"
            f"<td class=\"num\">{_e(item.final_amount)}</td>"
            "</tr>"
            for index, item in enumerate(invoice.items, start=1)
        )

        return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8" />
<title>Tax Invoice {_e(invoice.invoice_no)}</title>
<style>{_STYLES}</style>
</head>
<body>
<div class="invoice">
  <div class="header">
    <div class="company">
      <h1>{_e(c.name)}</h1>
      <p>{_e(c.address)}</p>
      <p>{_e(c.city)}, {_e(c.state)} - {_e(c.pincode)}</p>
      <p>GSTIN: {_e(c.gstin)}</p>
      <p>Phone: {_e(c.phone)}</p>
    </div>
    <div class="meta">
      <h2>TAX INVOICE</h2>
      <p>Invoice No: {_e(invoice.invoice_no)}</p>
      <p>Date: {invoice.date.strftime("%d/%m/%Y")}</p>
    </div>
  </div>
  <div class="bill-to">
    <h3>Bill To:</h3>
    <p>{_e(party.name)}</p>
    <p>{_e(party.address)}</p>
    <p>State: {_e(party.state)}</p>
    <p>GSTIN: {_e(party.gstin or "Unregistered")}</p>
    <p>Mobile: {_e(party.mobile)}</p>
  </div>
  <table class="items">
    <thead>
      <tr><th>#</th><th>Item</th><th>HSN</th><th>Qty</th><th>Rate</th><th>Tax %</th><th>Tax Amt</th><th>Total</th></tr>
    </thead>
    <tbody>
{rows}
    </tbody>
  </table>
  <table class="totals">
    <tr><td>Sub Total:</td><td>{_e(invoice.sub_total)}</td></tr>
    <tr><td>Total Tax:</td><td>{_e(invoice.tax_total)}</td></tr>
    <tr class="grand"><td>Grand Total:</td><td>{_e(invoice.grand_total)}</td></tr>
  </table>
  <p class="signature">Authorized Signatory</p>
  <p class="footer">Thank you for your business!</p>
</div>
</body>
</html>
"""

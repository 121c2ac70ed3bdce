from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas
from io import BytesIO
import pandas as pd

from state_codes import get_state_name_by_code
from tax_calc import amount_to_words, format_indian_currency


def _money(val):
    # reportlab's base fonts have no rupee glyph
    return format_indian_currency(val).replace("₹", "Rs. ")


def generate_quotation_pdf(record, company):
    """Render a quotation record (see quotation.to_record) with its GST breakdown."""
    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    width, height = A4

    # Set initial coordinates
    x, y = 40, height - 40

    # Header Section
    c.setFont("Helvetica-Bold", 14)
    c.drawCentredString(width/2, y, "QUOTATION")
    y -= 20
    c.setFont("Helvetica", 10)
    c.drawCentredString(width/2, y, company.get("name", ""))
    y -= 30

    # Quotation Details
    c.drawString(x, y, f"Title: {record.get('title', '')}")
    c.drawString(width/2, y, f"Type: {record['invoice_type']}")
    y -= 20

    # Seller Information
    seller_state = company.get("state_code", "")
    c.drawString(x, y, f"GSTIN: {company.get('gstin', '')}")
    c.drawString(width/2, y, f"State: {get_state_name_by_code(seller_state) or ''} ({seller_state})")
    y -= 20

    # Buyer Information
    c.drawString(x, y, f"Buyer GSTIN: {record.get('buyer_gstin') or 'Unregistered'}")
    c.drawString(width/2, y, "Intra-state" if record["is_intra_state"] else "Inter-state")
    y -= 30

    # Table Header
    c.setFont("Helvetica-Bold", 10)
    headers = ["Sr", "Description", "HSN/SAC", "Qty", "Unit Price", "Rate%", "Taxable", "Total"]
    positions = [x, x+25, x+190, x+250, x+290, x+360, x+400, x+470]

    for header, pos in zip(headers, positions):
        c.drawString(pos, y, header)
    y -= 20

    # Table Items
    c.setFont("Helvetica", 9)
    for item in record['items']:
        c.drawString(positions[0], y, str(item['item_number']))
        c.drawString(positions[1], y, str(item['description'])[:30])
        c.drawString(positions[2], y, str(item.get('hsn_sac_code', '')))
        c.drawString(positions[3], y, f"{item['quantity']:g}")
        c.drawString(positions[4], y, f"{item['unit_price']:.2f}")
        c.drawString(positions[5], y, f"{item['tax_rate']:g}")
        c.drawString(positions[6], y, f"{item['taxable_value']:.2f}")
        c.drawString(positions[7], y, f"{item['total']:.2f}")
        y -= 15

        # Page break if needed
        if y < 200:
            c.showPage()
            y = height - 40
            c.setFont("Helvetica", 9)

    # GST Breakdown
    y -= 20
    c.setFont("Helvetica-Bold", 10)
    c.drawString(x, y, "GST Breakdown")
    y -= 18
    c.setFont("Helvetica", 10)
    rows = [("Subtotal", record["subtotal"])]
    if record["discount_amount"]:
        rows.append(("Discount", -record["discount_amount"]))
    if record["is_intra_state"]:
        rows.append(("CGST", record["cgst_amount"]))
        rows.append(("SGST", record["sgst_amount"]))
    else:
        rows.append(("IGST", record["igst_amount"]))
    rows.append(("Total Tax", record["tax_amount"]))

    for label, value in rows:
        c.drawString(positions[5], y, f"{label}:")
        c.drawRightString(width - 40, y, _money(value))
        y -= 15

    # Grand Total
    y -= 5
    c.setFont("Helvetica-Bold", 10)
    c.drawString(positions[5], y, "Grand Total:")
    c.drawRightString(width - 40, y, _money(record["total_amount"]))
    y -= 20
    c.setFont("Helvetica-Oblique", 9)
    c.drawString(x, y, amount_to_words(record["total_amount"]))

    c.showPage()
    c.save()
    buffer.seek(0)
    return buffer.read()


def _totals_frame(record):
    return pd.DataFrame([{k: v for k, v in record.items() if k != "items"}])


def generate_quotation_xlsx_bytes(record):
    df = pd.DataFrame(record['items'])
    buffer = BytesIO()

    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name="Items")
        _totals_frame(record).to_excel(writer, index=False, sheet_name="Totals")

    buffer.seek(0)
    return buffer.getvalue()


def generate_quotation_csv_bytes(record):
    return pd.DataFrame(record["items"]).to_csv(index=False).encode("utf-8")

import streamlit as st
import pandas as pd
import logging
import os
from dataclasses import replace
from config import COMPANY_INFO, HSN_DATA_PATH, DEFAULT_TAX_RATE, configure_logging
from gst_validation import validate_gstin, format_gstin_for_display
from hsn_lookup import HSNLookup
from invoice_generator import (generate_quotation_pdf, generate_quotation_csv_bytes,
                               generate_quotation_xlsx_bytes)
from quotation import (AddItem, UpdateItem, RemoveItem, SetDiscount, SetTransactionKind,
                       new_draft, reduce, to_record)
from state_codes import get_state_name_by_code
from tax_calc import InvalidAmount, transaction_kind_for, format_indian_currency
from utils import read_line_items, normalize_item_dicts

configure_logging()
logger = logging.getLogger(__name__)

# ---------------------------------------------------
# PAGE CONFIG
# ---------------------------------------------------
st.set_page_config(page_title="GST Quotation Builder", layout="wide")

# ---------------------------------------------------
# CUSTOM CSS STYLING
# ---------------------------------------------------
st.markdown("""
    <style>
        .main, .stApp {
            background-color: #f7faff;
        }
        h1, h2, h3, h4 {
            color: #0b5394;
        }
        .company-header {
            text-align: center;
            background-color: #008000;
            color: white;
            padding: 15px 0;
        }
        .company-header h2 {
            margin: 0;
            font-weight: 700;
        }
        .company-header p {
            margin: 2px 0;
            font-size: 13px;
        }
        .section-title {
            font-size: 22px;
            color: #008000;
            font-weight: 700;
            border-bottom: 2px solid #008000;
            margin-bottom: 12px;
            padding-bottom: 4px;
        }
        .summary-box {
            background-color: #eaf1fb;
            padding: 12px 18px;
            border-radius: 8px;
            font-weight: 600;
            margin-top: 15px;
            border-left: 4px solid #0b5394;
        }
    </style>
""", unsafe_allow_html=True)

# ---------------------------------------------------
# COMPANY HEADER
# ---------------------------------------------------
if os.path.exists(COMPANY_INFO["logo_path"]):
    st.image(COMPANY_INFO["logo_path"], width=140)

st.markdown(f"""
<div class="company-header">
    <h2>{COMPANY_INFO["name"]}</h2>
    <p>{COMPANY_INFO["address"]}</p>
    <p>GSTIN: {format_gstin_for_display(COMPANY_INFO["gstin"])} | {COMPANY_INFO["contact"]} | {COMPANY_INFO["email"]}</p>
</div>
""", unsafe_allow_html=True)

st.title("GST Quotation Builder")

# ---------------------------------------------------
# LOAD HSN LOOKUP
# ---------------------------------------------------
@st.cache_resource
def load_hsn(path):
    if not os.path.exists(path):
        logger.warning("HSN/SAC master not found at %s, auto-suggestion disabled", path)
        return None
    return HSNLookup(path)


hsn = load_hsn(HSN_DATA_PATH)

if "draft" not in st.session_state:
    st.session_state.draft = new_draft(COMPANY_INFO["state_code"])


def apply(event):
    """Run one edit through the reducer; bad amounts are reported, not applied."""
    try:
        st.session_state.draft = reduce(st.session_state.draft, event)
    except InvalidAmount as e:
        st.error(str(e))


# ---------------------------------------------------
# BUYER SECTION
# ---------------------------------------------------
st.markdown('<div class="section-title">Buyer</div>', unsafe_allow_html=True)

title = st.text_input("Quotation Title", value=st.session_state.draft.title)
if title != st.session_state.draft.title:
    st.session_state.draft = replace(st.session_state.draft, title=title)

buyer_gstin = st.text_input("Buyer GSTIN (leave empty for B2C)")
buyer_state_code = None
if buyer_gstin:
    check = validate_gstin(buyer_gstin)
    if check.is_valid:
        buyer_state_code = check.state_code
        st.caption(f"Registered in {check.state_name} | PAN {check.pan}")
    else:
        st.error(check.error)
        buyer_gstin = ""
else:
    st.caption("B2C sales are billed as intra-state (CGST + SGST).")

kind = transaction_kind_for(buyer_gstin, buyer_state_code)
if kind != st.session_state.draft.kind:
    apply(SetTransactionKind(kind))

# ---------------------------------------------------
# LINE ITEMS
# ---------------------------------------------------
st.markdown('<div class="section-title">Line Items</div>', unsafe_allow_html=True)

if st.button("Add Item"):
    apply(AddItem(tax_rate=DEFAULT_TAX_RATE))

for i, it in enumerate(st.session_state.draft.items):
    cols = st.columns([3, 1, 1, 1, 1, 1])
    desc = cols[0].text_input(f"Item {i+1}", value=it.description, key=f"desc_{it.id}")
    qty = cols[1].number_input("Qty", min_value=0.0, value=it.quantity, key=f"qty_{it.id}")
    price = cols[2].number_input("Unit Price", min_value=0.0, value=it.unit_price, key=f"price_{it.id}")
    rate = cols[3].number_input("GST %", min_value=0.0, value=it.tax_rate, key=f"rate_{it.id}")
    cols[4].write(format_indian_currency(it.tax.total))

    if desc != it.description:
        apply(UpdateItem(it.id, "description", desc))
        # Lookup HSN and GST
        if hsn is not None and desc:
            sugg = hsn.suggest(desc, limit=1)
            if sugg:
                apply(UpdateItem(it.id, "hsn_sac_code", sugg[0]["hsn_code"]))
                apply(UpdateItem(it.id, "tax_rate", sugg[0]["rate"]))
    for field, value, current in (("quantity", qty, it.quantity),
                                  ("unit_price", price, it.unit_price),
                                  ("tax_rate", rate, it.tax_rate)):
        if value != current:
            apply(UpdateItem(it.id, field, value))
    if it.hsn_sac_code:
        cols[0].caption(f"HSN/SAC: {it.hsn_sac_code}")
    if cols[5].button("Remove", key=f"rm_{it.id}"):
        apply(RemoveItem(it.id))
        st.rerun()

uploaded = st.file_uploader("Import items (CSV/XLSX)", type=["csv", "xlsx"])
if uploaded and st.button("Import"):
    try:
        rows = normalize_item_dicts(read_line_items(uploaded.read(), uploaded.name), hsn)
    except ValueError as e:
        st.error(f"Error reading {uploaded.name}: {e}")
    else:
        for row in rows:
            apply(AddItem(description=row["Description"], quantity=row["qty"],
                          unit_price=row["unit_price"], hsn_sac_code=row["hsn"], tax_rate=row["rate"]))
        st.success(f"Imported {len(rows)} items from {uploaded.name}")
        st.rerun()

discount = st.number_input("Discount (Rs.)", min_value=0.0, value=st.session_state.draft.discount)
if discount != st.session_state.draft.discount:
    apply(SetDiscount(discount))

# ---------------------------------------------------
# SUMMARY & DOWNLOADS
# ---------------------------------------------------
draft = st.session_state.draft
record = to_record(draft)

if draft.is_intra_state:
    tax_line = f"CGST: {format_indian_currency(record['cgst_amount'])} | SGST: {format_indian_currency(record['sgst_amount'])}"
else:
    tax_line = f"IGST: {format_indian_currency(record['igst_amount'])}"

st.markdown(f"""
<div class="summary-box">
    Subtotal: {format_indian_currency(record['subtotal'])}<br>
    Discount: -{format_indian_currency(record['discount_amount'])}<br>
    {tax_line}<br>
    <b>Grand Total: {format_indian_currency(record['total_amount'])}</b>
</div>
""", unsafe_allow_html=True)

if record["items"]:
    st.dataframe(pd.DataFrame(record["items"]), use_container_width=True)
    seller_state = get_state_name_by_code(COMPANY_INFO["state_code"]) or COMPANY_INFO["state_code"]
    st.caption(f"Seller state: {seller_state}")

    col1, col2, col3 = st.columns(3)
    with col1:
        st.download_button("Download Quotation (PDF)",
                           data=generate_quotation_pdf(record, COMPANY_INFO),
                           file_name="quotation.pdf",
                           mime="application/pdf")
    with col2:
        st.download_button("Download Items (CSV)",
                           data=generate_quotation_csv_bytes(record),
                           file_name="quotation.csv",
                           mime="text/csv")
    with col3:
        st.download_button("Download Quotation (Excel)",
                           data=generate_quotation_xlsx_bytes(record),
                           file_name="quotation.xlsx",
                           mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet")
else:
    st.info("Add at least one item to build the quotation.")

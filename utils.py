import io
import logging
import pandas as pd # type: ignore
from typing import List, Dict

from config import DEFAULT_TAX_RATE

logger = logging.getLogger(__name__)


def read_line_items(file_bytes: bytes, filename: str) -> List[Dict]:
    """Read quotation line items from a CSV/XLSX sheet (Description, qty, unit_price)."""
    fname = filename.lower()
    if fname.endswith(".csv"):
        df = pd.read_csv(io.BytesIO(file_bytes))
    elif fname.endswith(".xlsx"):
        df = pd.read_excel(io.BytesIO(file_bytes))
    else:
        raise ValueError(f"Unsupported file type: {filename}")
    return _items_from_dataframe(df)


def _items_from_dataframe(df: pd.DataFrame):
    items = []
    for idx, row in df.iterrows():
        try:
            desc = "" if pd.isna(row.iloc[0]) else str(row.iloc[0]).strip()
            qty = float(row.iloc[1])
            unit = float(row.iloc[2])
        except (IndexError, TypeError, ValueError):
            logger.warning("Skipping unreadable line item row %s", idx)
            continue
        if not desc or pd.isna(qty) or pd.isna(unit) or qty < 0 or unit < 0:
            logger.warning("Skipping invalid line item row %s", idx)
            continue
        items.append({"Description": desc, "qty": qty, "unit_price": unit})
    return items


def normalize_item_dicts(items: List[Dict], hsn_lookup, default_rate: float = DEFAULT_TAX_RATE):
    normalized = []
    for it in items:
        desc = it.get("Description","")
        qty = it.get("qty",1)
        unit = it.get("unit_price",0.0)
        sugg = hsn_lookup.suggest(desc, limit=1) if hsn_lookup is not None else []
        if sugg:
            hsn_code = sugg[0]['hsn_code']
            rate = sugg[0]['rate']
        else:
            hsn_code = ""
            rate = default_rate
        normalized.append({"Description": desc, "qty": float(qty), "unit_price": float(unit), "hsn": hsn_code, "rate": float(rate)})
    return normalized

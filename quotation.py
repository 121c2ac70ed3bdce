"""
Quotation draft as an immutable value.

Every edit from the form is an event; ``reduce(draft, event)`` returns a new
draft with all line taxes and document totals recomputed from scratch.
"""
import logging
import uuid
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple, Union

from config import DEFAULT_TAX_RATE
from tax_calc import (
    B2C, DocumentTotals, InvalidAmount, LineTax, TransactionKind,
    compute_line, compute_totals, resolve_intra_state,
)

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("description", "hsn_sac_code", "quantity", "unit", "unit_price", "tax_rate")
NUMERIC_FIELDS = ("quantity", "unit_price", "tax_rate")


@dataclass(frozen=True)
class LineItem:
    id: str
    tax: LineTax
    description: str = ""
    hsn_sac_code: str = ""
    quantity: float = 1.0
    unit: str = "piece"
    unit_price: float = 0.0
    tax_rate: float = DEFAULT_TAX_RATE


@dataclass(frozen=True)
class QuotationDraft:
    seller_state_code: str
    totals: DocumentTotals
    kind: TransactionKind = field(default_factory=B2C)
    title: str = ""
    items: Tuple[LineItem, ...] = ()
    discount: float = 0.0

    @property
    def is_intra_state(self) -> bool:
        return resolve_intra_state(self.kind, self.seller_state_code)


# ---------------------------------------------------
# EDIT EVENTS
# ---------------------------------------------------
@dataclass(frozen=True)
class AddItem:
    description: str = ""
    hsn_sac_code: str = ""
    quantity: float = 1.0
    unit: str = "piece"
    unit_price: float = 0.0
    tax_rate: float = DEFAULT_TAX_RATE
    item_id: Optional[str] = None


@dataclass(frozen=True)
class UpdateItem:
    item_id: str
    field: str
    value: object


@dataclass(frozen=True)
class RemoveItem:
    item_id: str


@dataclass(frozen=True)
class SetDiscount:
    discount: float


@dataclass(frozen=True)
class SetTransactionKind:
    kind: TransactionKind


Event = Union[AddItem, UpdateItem, RemoveItem, SetDiscount, SetTransactionKind]


def _recompute(draft: QuotationDraft) -> QuotationDraft:
    intra = draft.is_intra_state
    items = tuple(
        replace(it, tax=compute_line(it.quantity, it.unit_price, it.tax_rate, intra))
        for it in draft.items
    )
    totals = compute_totals([it.tax for it in items], draft.discount)
    return replace(draft, items=items, totals=totals)


def new_draft(seller_state_code: str, kind: TransactionKind = B2C(), title: str = "") -> QuotationDraft:
    return _recompute(QuotationDraft(
        seller_state_code=seller_state_code,
        kind=kind,
        title=title,
        totals=compute_totals([]),
    ))


def _find(draft, item_id):
    for idx, it in enumerate(draft.items):
        if it.id == item_id:
            return idx
    raise KeyError(item_id)


def reduce(draft: QuotationDraft, event: Event) -> QuotationDraft:
    """Apply one edit and return the recomputed draft; the input is never mutated."""
    if isinstance(event, AddItem):
        if event.item_id and any(it.id == event.item_id for it in draft.items):
            raise ValueError(f"Duplicate line item id: {event.item_id}")
        item = LineItem(
            id=event.item_id or uuid.uuid4().hex[:8],
            description=event.description,
            hsn_sac_code=event.hsn_sac_code,
            quantity=float(event.quantity),
            unit=event.unit,
            unit_price=float(event.unit_price),
            tax_rate=float(event.tax_rate),
            tax=compute_line(event.quantity, event.unit_price, event.tax_rate, draft.is_intra_state),
        )
        updated = replace(draft, items=draft.items + (item,))

    elif isinstance(event, UpdateItem):
        if event.field not in EDITABLE_FIELDS:
            raise ValueError(f"Unknown line item field: {event.field}")
        idx = _find(draft, event.item_id)
        value = float(event.value) if event.field in NUMERIC_FIELDS else event.value
        if event.field in NUMERIC_FIELDS and value < 0:
            raise InvalidAmount(event.field, value)
        items = list(draft.items)
        items[idx] = replace(items[idx], **{event.field: value})
        updated = replace(draft, items=tuple(items))

    elif isinstance(event, RemoveItem):
        idx = _find(draft, event.item_id)
        updated = replace(draft, items=draft.items[:idx] + draft.items[idx + 1:])

    elif isinstance(event, SetDiscount):
        discount = float(event.discount or 0)
        if discount < 0:
            raise InvalidAmount("discount", discount)
        updated = replace(draft, discount=discount)

    elif isinstance(event, SetTransactionKind):
        updated = replace(draft, kind=event.kind)

    else:
        raise TypeError(f"Unknown quotation event: {event!r}")

    logger.debug("Applied %s to quotation %r", type(event).__name__, draft.title)
    return _recompute(updated)


def to_record(draft: QuotationDraft):
    """Flat, rounded record as stored on the quotation row, plus its item rows."""
    totals = draft.totals.rounded()
    items = []
    for number, it in enumerate(draft.items, start=1):
        tax = it.tax.rounded()
        items.append({
            "item_number": number,
            "description": it.description,
            "hsn_sac_code": it.hsn_sac_code,
            "quantity": it.quantity,
            "unit": it.unit,
            "unit_price": it.unit_price,
            "tax_rate": it.tax_rate,
            "taxable_value": tax.taxable_value,
            "gst_amount": tax.gst_amount,
            "cgst_amount": tax.cgst_amount,
            "sgst_amount": tax.sgst_amount,
            "igst_amount": tax.igst_amount,
            "total": tax.total,
        })
    return {
        "title": draft.title,
        "invoice_type": "B2C" if isinstance(draft.kind, B2C) else "B2B",
        "buyer_gstin": getattr(draft.kind, "buyer_gstin", None),
        "is_intra_state": draft.is_intra_state,
        "subtotal": totals.subtotal,
        "discount_amount": totals.discount,
        "cgst_amount": totals.total_cgst,
        "sgst_amount": totals.total_sgst,
        "igst_amount": totals.total_igst,
        "tax_amount": totals.total_tax,
        "total_amount": totals.grand_total,
        "items": items,
    }

import logging
from dataclasses import dataclass, fields, replace
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Union

logger = logging.getLogger(__name__)

_PAISA = Decimal("0.01")


class InvalidAmount(ValueError):
    """Raised when a quantity, price, rate or discount is negative."""

    def __init__(self, field, value):
        self.field = field
        self.value = value
        super().__init__(f"{field} must not be negative (got {value})")


def money(val):
    """Round to 2 decimals consistently for money values (half away from zero)."""
    return float(Decimal(str(float(val))).quantize(_PAISA, rounding=ROUND_HALF_UP))


def _check_non_negative(**amounts):
    for name, value in amounts.items():
        if value < 0:
            raise InvalidAmount(name, value)


# ---------------------------------------------------
# TRANSACTION KIND
# ---------------------------------------------------
@dataclass(frozen=True)
class B2C:
    """Sale to an unregistered buyer (no GSTIN)."""


@dataclass(frozen=True)
class B2B:
    buyer_gstin: str
    buyer_state_code: str


TransactionKind = Union[B2C, B2B]


def is_intra_state(seller_state_code: str, buyer_state_code: str) -> bool:
    return seller_state_code.strip() == buyer_state_code.strip()


def resolve_intra_state(kind: TransactionKind, seller_state_code: str) -> bool:
    """
    Decide the tax split for a transaction.
    B2B  -> compare buyer and seller state codes
    B2C  -> always intra-state (CGST + SGST)
    """
    if isinstance(kind, B2B):
        return is_intra_state(seller_state_code, kind.buyer_state_code)
    if isinstance(kind, B2C):
        return True
    raise TypeError(f"Unknown transaction kind: {kind!r}")


def transaction_kind_for(buyer_gstin: Optional[str], buyer_state_code: Optional[str] = None) -> TransactionKind:
    gstin = (buyer_gstin or "").strip().upper()
    if not gstin:
        return B2C()
    return B2B(buyer_gstin=gstin, buyer_state_code=(buyer_state_code or gstin[:2]).strip())


# ---------------------------------------------------
# LINE ITEM
# ---------------------------------------------------
@dataclass(frozen=True)
class LineTax:
    taxable_value: float
    gst_amount: float
    cgst_amount: float
    sgst_amount: float
    igst_amount: float
    total: float
    item_amount: float = 0.0

    def rounded(self):
        return replace(self, **{f.name: money(getattr(self, f.name)) for f in fields(self)})

    def as_dict(self):
        return {f.name: getattr(self, f.name) for f in fields(self)}


def compute_line(qty, unit_price, rate, intra_state, discount_percent=0.0):
    """
    Compute tax breakdown for one quotation/invoice line.
    intra_state -> CGST + SGST (half each)
    else        -> IGST
    Amounts are not rounded; call .rounded() before persisting.
    """
    _check_non_negative(quantity=qty, unit_price=unit_price, tax_rate=rate,
                        discount_percent=discount_percent)

    item_amount = qty * unit_price
    taxable = item_amount - item_amount * discount_percent / 100
    gst = taxable * rate / 100

    cgst = sgst = igst = 0.0
    if intra_state:
        cgst = gst / 2
        sgst = gst / 2
    else:
        igst = gst

    return LineTax(
        taxable_value=taxable,
        gst_amount=gst,
        cgst_amount=cgst,
        sgst_amount=sgst,
        igst_amount=igst,
        total=taxable + gst,
        item_amount=item_amount,
    )


# ---------------------------------------------------
# DOCUMENT TOTALS
# ---------------------------------------------------
@dataclass(frozen=True)
class DocumentTotals:
    subtotal: float
    discount: float
    total_cgst: float
    total_sgst: float
    total_igst: float
    total_tax: float
    grand_total: float

    def rounded(self):
        return replace(self, **{f.name: money(getattr(self, f.name)) for f in fields(self)})

    def as_dict(self):
        return {f.name: getattr(self, f.name) for f in fields(self)}


def compute_totals(lines: Iterable[LineTax], discount=0.0) -> DocumentTotals:
    """Aggregate line taxes; discount comes off the pre-tax subtotal, once."""
    _check_non_negative(discount=discount)

    subtotal = cgst = sgst = igst = 0.0
    for line in lines:
        subtotal += line.taxable_value
        cgst += line.cgst_amount
        sgst += line.sgst_amount
        igst += line.igst_amount

    total_tax = cgst + sgst + igst
    totals = DocumentTotals(
        subtotal=subtotal,
        discount=discount,
        total_cgst=cgst,
        total_sgst=sgst,
        total_igst=igst,
        total_tax=total_tax,
        grand_total=subtotal - discount + total_tax,
    )
    logger.debug("Document totals: %s", totals)
    return totals


def calculate_reverse_gst(inclusive_amount, rate):
    """Split a GST-inclusive amount into (base_amount, gst_amount)."""
    _check_non_negative(inclusive_amount=inclusive_amount, tax_rate=rate)
    base = inclusive_amount / (1 + rate / 100)
    return money(base), money(inclusive_amount - base)


def calculate_gst_liability(documents: Iterable[DocumentTotals]):
    """Total tax liability over a period, e.g. for a GST return."""
    cgst = sgst = igst = 0.0
    for doc in documents:
        cgst += doc.total_cgst
        sgst += doc.total_sgst
        igst += doc.total_igst
    return {
        "total_cgst": money(cgst),
        "total_sgst": money(sgst),
        "total_igst": money(igst),
        "total_gst": money(cgst + sgst + igst),
    }


# ---------------------------------------------------
# PRESENTATION HELPERS
# ---------------------------------------------------
_ONES = ["", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine"]
_TEENS = ["Ten", "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen",
          "Sixteen", "Seventeen", "Eighteen", "Nineteen"]
_TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]

# Indian numbering: crore, lakh, thousand, hundred
_SCALES = [(10_000_000, "Crore"), (100_000, "Lakh"), (1000, "Thousand"), (100, "Hundred")]


def _words(num: int) -> str:
    if num == 0:
        return ""
    if num < 10:
        return _ONES[num]
    if num < 20:
        return _TEENS[num - 10]
    if num < 100:
        rest = _ONES[num % 10]
        return _TENS[num // 10] + (" " + rest if rest else "")
    for size, label in _SCALES:
        if num >= size:
            head = _words(num // size) + " " + label
            tail = _words(num % size)
            return head + (" " + tail if tail else "")
    return ""


def amount_to_words(amount) -> str:
    """Rupee amount in words for invoices, e.g. 'Rupees One Lakh Only'."""
    value = money(amount)
    if value == 0:
        return "Zero Rupees Only"
    rupees, paise = f"{abs(value):.2f}".split(".")
    words = "Rupees " + (_words(int(rupees)) or "Zero")
    if value < 0:
        words = "Minus " + words
    if int(paise) > 0:
        words += " and " + _words(int(paise)) + " Paise"
    return words + " Only"


def format_indian_currency(amount) -> str:
    """Format with Indian digit grouping: ₹12,34,567.89"""
    value = money(amount)
    sign = "-" if value < 0 else ""
    integer, decimal = f"{abs(value):.2f}".split(".")
    last_three, others = integer[-3:], integer[:-3]
    groups = []
    while others:
        groups.insert(0, others[-2:])
        others = others[:-2]
    grouped = ",".join(groups + [last_three])
    return f"{sign}₹{grouped}.{decimal}"

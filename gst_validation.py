"""
Format checks for GST identifiers: GSTIN, PAN, HSN/SAC codes, rates,
state codes, invoice numbers and IRNs.

Every validator returns a ValidationResult instead of raising, so a form can
show the error next to the field and carry on. Checks are structural only:
no checksum verification and no registry lookup.
"""
import re
from dataclasses import dataclass
from typing import Optional

from state_codes import GST_STATE_CODES

GSTIN_RE = re.compile(r"^[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z][1-9A-Z]Z[0-9A-Z]$")
PAN_RE = re.compile(r"^[A-Z]{5}[0-9]{4}[A-Z]$")
HSN_RE = re.compile(r"^[0-9]{4}([0-9]{2})?([0-9]{2})?$")
SAC_RE = re.compile(r"^[0-9]{6}$")
IRN_RE = re.compile(r"^[A-Za-z0-9]{64}$")
INVOICE_NUMBER_BAD_CHARS = re.compile(r'[<>:"\\|?*]')

GST_RATE_SLABS = (0, 0.25, 3, 5, 12, 18, 28)


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    error: Optional[str] = None
    state_code: Optional[str] = None
    pan: Optional[str] = None
    state_name: Optional[str] = None
    code_type: Optional[str] = None

    def __bool__(self):
        return self.is_valid


def _invalid(error):
    return ValidationResult(is_valid=False, error=error)


def validate_gstin(gstin) -> ValidationResult:
    """
    Validate GSTIN format.
    Format: 2 digits (state) + 10 chars (PAN) + 1 char (entity) + 'Z' + 1 check char
    Example: 29ABCDE1234F1Z5
    """
    if not gstin:
        return _invalid("GSTIN is required")

    clean = str(gstin).strip().upper()
    if len(clean) != 15:
        return _invalid("GSTIN must be 15 characters")
    if not GSTIN_RE.match(clean):
        return _invalid("Invalid GSTIN format")

    state_code = clean[:2]
    if state_code not in GST_STATE_CODES:
        return _invalid("Invalid state code in GSTIN")

    pan = clean[2:12]
    return ValidationResult(is_valid=True, state_code=state_code, pan=pan,
                            state_name=GST_STATE_CODES[state_code])


def validate_pan(pan) -> ValidationResult:
    """PAN: 5 letters + 4 digits + 1 letter, e.g. ABCDE1234F."""
    if not pan:
        return _invalid("PAN is required")
    clean = str(pan).strip().upper()
    if len(clean) != 10:
        return _invalid("PAN must be 10 characters")
    if not PAN_RE.match(clean):
        return _invalid("Invalid PAN format")
    return ValidationResult(is_valid=True, pan=clean)


def validate_hsn_code(code) -> ValidationResult:
    if not code:
        return _invalid("HSN code is required")
    if not HSN_RE.match(str(code).strip()):
        return _invalid("Invalid HSN code format (must be 4, 6, or 8 digits)")
    return ValidationResult(is_valid=True, code_type="HSN")


def validate_sac_code(code) -> ValidationResult:
    if not code:
        return _invalid("SAC code is required")
    if not SAC_RE.match(str(code).strip()):
        return _invalid("Invalid SAC code format (must be 6 digits)")
    return ValidationResult(is_valid=True, code_type="SAC")


def validate_hsn_or_sac(code) -> ValidationResult:
    """Six digits reads as SAC; 4 or 8 digits as HSN."""
    if not code:
        return _invalid("HSN/SAC code is required")
    clean = str(code).strip()
    if SAC_RE.match(clean):
        return ValidationResult(is_valid=True, code_type="SAC")
    if HSN_RE.match(clean):
        return ValidationResult(is_valid=True, code_type="HSN")
    return _invalid("Invalid HSN/SAC code format")


def validate_gst_rate(rate) -> ValidationResult:
    try:
        value = float(rate)
    except (TypeError, ValueError):
        value = None
    if value not in GST_RATE_SLABS:
        slabs = ", ".join(f"{r:g}" for r in GST_RATE_SLABS)
        return _invalid(f"Invalid GST rate. Valid rates are: {slabs}%")
    return ValidationResult(is_valid=True)


def validate_state_code(state_code) -> ValidationResult:
    if not state_code:
        return _invalid("State code is required")
    clean = str(state_code).strip()
    if len(clean) != 2:
        return _invalid("State code must be 2 digits")
    if clean not in GST_STATE_CODES:
        return _invalid("Invalid state code")
    return ValidationResult(is_valid=True, state_code=clean, state_name=GST_STATE_CODES[clean])


def validate_invoice_number(invoice_number) -> ValidationResult:
    """Recommended format PREFIX/YYYY-YY/SEQ, e.g. INV/2025-26/001."""
    if not invoice_number:
        return _invalid("Invoice number is required")
    clean = str(invoice_number).strip()
    if len(clean) < 3:
        return _invalid("Invoice number too short")
    if INVOICE_NUMBER_BAD_CHARS.search(clean):
        return _invalid("Invoice number contains invalid characters")
    return ValidationResult(is_valid=True)


def validate_irn(irn) -> ValidationResult:
    if not irn:
        return _invalid("IRN is required")
    clean = str(irn).strip()
    if len(clean) != 64:
        return _invalid("IRN must be 64 characters")
    if not IRN_RE.match(clean):
        return _invalid("Invalid IRN format")
    return ValidationResult(is_valid=True)


def extract_state_code(gstin) -> Optional[str]:
    if not gstin or len(gstin) < 2:
        return None
    return gstin[:2]


def extract_pan(gstin) -> Optional[str]:
    if not gstin or len(gstin) < 12:
        return None
    return gstin[2:12]


def get_state_from_gstin(gstin) -> Optional[str]:
    state_code = extract_state_code(gstin)
    if not state_code:
        return None
    return GST_STATE_CODES.get(state_code)


def is_gstin_from_state(gstin, state_code) -> bool:
    return extract_state_code(gstin) == state_code


def format_gstin_for_display(gstin):
    """29ABCDE1234F1Z5 -> 29 ABCDE1234F 1Z 5"""
    if not gstin or len(gstin) != 15:
        return gstin
    return f"{gstin[:2]} {gstin[2:12]} {gstin[12:14]} {gstin[14:]}"


def mask_gstin(gstin):
    if not gstin or len(gstin) != 15:
        return gstin
    return "*" * 11 + gstin[11:]

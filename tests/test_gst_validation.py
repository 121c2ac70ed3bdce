import pytest

from gst_validation import (
    extract_pan, extract_state_code, format_gstin_for_display, get_state_from_gstin,
    is_gstin_from_state, mask_gstin, validate_gst_rate, validate_gstin,
    validate_hsn_code, validate_hsn_or_sac, validate_invoice_number, validate_irn,
    validate_pan, validate_sac_code, validate_state_code,
)


def test_valid_gstin_extracts_state_and_pan():
    res = validate_gstin("29ABCDE1234F1Z5")
    assert res.is_valid
    assert res.state_code == "29"
    assert res.pan == "ABCDE1234F"
    assert res.state_name == "Karnataka"
    assert res.error is None


def test_gstin_is_normalised():
    res = validate_gstin("  27abcde1234f1z5 ")
    assert res.is_valid
    assert res.state_code == "27"


@pytest.mark.parametrize("gstin,error", [
    ("", "GSTIN is required"),
    (None, "GSTIN is required"),
    ("29ABCDE1234F1Z", "GSTIN must be 15 characters"),
    ("29ABCDE1234F1Z55", "GSTIN must be 15 characters"),
    ("29ABCDE1234F1X5", "Invalid GSTIN format"),
    ("2AABCDE1234F1Z5", "Invalid GSTIN format"),
    ("29ABCDE1234F0Z5", "Invalid GSTIN format"),
    ("28ABCDE1234F1Z5", "Invalid state code in GSTIN"),
    ("99ABCDE1234F1Z5", "Invalid state code in GSTIN"),
])
def test_invalid_gstin(gstin, error):
    res = validate_gstin(gstin)
    assert not res.is_valid
    assert res.error == error
    assert res.state_code is None
    assert res.pan is None


def test_pan():
    assert validate_pan("abcde1234f").is_valid
    assert validate_pan("").error == "PAN is required"
    assert validate_pan("ABCDE1234").error == "PAN must be 10 characters"
    assert validate_pan("ABCD12345F").error == "Invalid PAN format"


def test_hsn_and_sac_codes():
    assert validate_hsn_code("9403").is_valid
    assert validate_hsn_code("94036000").is_valid
    assert not validate_hsn_code("94036").is_valid
    assert validate_sac_code("998391").is_valid
    assert not validate_sac_code("9983").is_valid


def test_hsn_or_sac_detection():
    assert validate_hsn_or_sac("998391").code_type == "SAC"
    assert validate_hsn_or_sac("9403").code_type == "HSN"
    assert validate_hsn_or_sac("94036000").code_type == "HSN"
    assert validate_hsn_or_sac("94A3").error == "Invalid HSN/SAC code format"


@pytest.mark.parametrize("rate", [0, 0.25, 3, 5, 12, 18, 28, "18"])
def test_standard_gst_rates(rate):
    assert validate_gst_rate(rate).is_valid


@pytest.mark.parametrize("rate", [7.5, 40, -18, None, "abc"])
def test_nonstandard_gst_rates(rate):
    res = validate_gst_rate(rate)
    assert not res.is_valid
    assert "0, 0.25, 3, 5, 12, 18, 28" in res.error


def test_state_code():
    res = validate_state_code("07")
    assert res.is_valid and res.state_name == "Delhi"
    assert validate_state_code("7").error == "State code must be 2 digits"
    assert validate_state_code("28").error == "Invalid state code"


def test_invoice_number():
    assert validate_invoice_number("INV/2025-26/001").is_valid
    assert validate_invoice_number("IN").error == "Invoice number too short"
    assert validate_invoice_number("INV|001").error == "Invoice number contains invalid characters"


def test_irn():
    assert validate_irn("a1" * 32).is_valid
    assert validate_irn("a1" * 31).error == "IRN must be 64 characters"
    assert validate_irn("-" * 64).error == "Invalid IRN format"


def test_gstin_helpers():
    gstin = "29ABCDE1234F1Z5"
    assert extract_state_code(gstin) == "29"
    assert extract_pan(gstin) == "ABCDE1234F"
    assert extract_pan("29ABC") is None
    assert get_state_from_gstin(gstin) == "Karnataka"
    assert is_gstin_from_state(gstin, "29")
    assert not is_gstin_from_state(gstin, "27")
    assert format_gstin_for_display(gstin) == "29 ABCDE1234F 1Z 5"
    assert mask_gstin(gstin) == "***********F1Z5"
    assert mask_gstin("short") == "short"


def test_result_is_truthy_only_when_valid():
    assert validate_pan("ABCDE1234F")
    assert not validate_pan("nope")


def test_gstin_pan_comes_from_the_format_check():
    # a malformed PAN section is caught by the GSTIN pattern itself
    res = validate_gstin("29ABCD11234F1Z5")
    assert res.error == "Invalid GSTIN format"
    assert validate_gstin("07AAEPM0123C1Z1").pan == "AAEPM0123C"

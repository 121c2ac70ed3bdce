import pytest

from quotation import (
    AddItem, RemoveItem, SetDiscount, SetTransactionKind, UpdateItem,
    new_draft, reduce, to_record,
)
from tax_calc import B2B, B2C, InvalidAmount


@pytest.fixture
def draft():
    d = new_draft("29", title="Living room")
    d = reduce(d, AddItem(description="Sofa", quantity=2, unit_price=1000, tax_rate=18, item_id="a"))
    d = reduce(d, AddItem(description="Lamp", quantity=1, unit_price=500, tax_rate=18, item_id="b"))
    return d


def test_new_draft_is_b2c_and_empty():
    d = new_draft("29")
    assert d.kind == B2C()
    assert d.items == ()
    assert d.totals.grand_total == 0


def test_add_items_recomputes_totals(draft):
    assert draft.totals.subtotal == 2500
    assert draft.totals.total_tax == 450
    assert draft.totals.total_cgst == draft.totals.total_sgst == 225


def test_discount_applied_once_before_tax(draft):
    d = reduce(draft, SetDiscount(100))
    assert d.totals.grand_total == 2850
    assert d.totals.total_tax == 450


def test_update_quantity(draft):
    d = reduce(draft, UpdateItem("b", "quantity", 3))
    item = d.items[1]
    assert item.quantity == 3
    assert item.tax.taxable_value == 1500
    assert d.totals.subtotal == 3500


def test_reduce_leaves_original_untouched(draft):
    reduce(draft, UpdateItem("a", "unit_price", 5))
    assert draft.items[0].unit_price == 1000
    assert draft.totals.subtotal == 2500


def test_switching_to_inter_state_moves_tax_to_igst(draft):
    d = reduce(draft, SetTransactionKind(B2B("27ABCDE1234F1Z5", "27")))
    assert not d.is_intra_state
    assert d.totals.total_igst == 450
    assert d.totals.total_cgst == 0
    assert all(it.tax.cgst_amount == 0 for it in d.items)


def test_b2b_same_state_stays_intra_state(draft):
    d = reduce(draft, SetTransactionKind(B2B("29ABCDE1234F1Z5", "29")))
    assert d.is_intra_state
    assert d.totals.total_igst == 0


def test_remove_item(draft):
    d = reduce(draft, RemoveItem("a"))
    assert [it.id for it in d.items] == ["b"]
    assert d.totals.subtotal == 500


def test_unknown_item_raises_key_error(draft):
    with pytest.raises(KeyError):
        reduce(draft, RemoveItem("zzz"))


def test_unknown_field_rejected(draft):
    with pytest.raises(ValueError):
        reduce(draft, UpdateItem("a", "taxable_value", 1))


def test_negative_values_rejected(draft):
    with pytest.raises(InvalidAmount):
        reduce(draft, UpdateItem("a", "unit_price", -10))
    with pytest.raises(InvalidAmount):
        reduce(draft, SetDiscount(-5))
    with pytest.raises(InvalidAmount):
        reduce(draft, AddItem(quantity=-1, unit_price=10))


def test_generated_ids_are_unique():
    d = new_draft("29")
    d = reduce(d, AddItem())
    d = reduce(d, AddItem())
    assert d.items[0].id != d.items[1].id


def test_to_record_rounds_and_flattens(draft):
    d = reduce(draft, UpdateItem("b", "unit_price", 333.333))
    d = reduce(d, SetTransactionKind(B2B("27ABCDE1234F1Z5", "27")))
    record = to_record(d)
    assert record["invoice_type"] == "B2B"
    assert record["buyer_gstin"] == "27ABCDE1234F1Z5"
    assert record["is_intra_state"] is False
    assert record["items"][1]["taxable_value"] == 333.33
    assert record["items"][1]["igst_amount"] == 60.0
    assert record["items"][0]["item_number"] == 1
    assert record["total_amount"] == pytest.approx(
        record["subtotal"] - record["discount_amount"] + record["tax_amount"], abs=0.01)


def test_to_record_b2c(draft):
    record = to_record(draft)
    assert record["invoice_type"] == "B2C"
    assert record["buyer_gstin"] is None
    assert record["cgst_amount"] == 225.0


def test_duplicate_item_id_rejected(draft):
    with pytest.raises(ValueError, match="Duplicate"):
        reduce(draft, AddItem(description="Second sofa", item_id="a"))
    assert [it.id for it in draft.items] == ["a", "b"]


def test_items_stay_addressable_after_rejected_duplicate(draft):
    with pytest.raises(ValueError):
        reduce(draft, AddItem(item_id="b"))
    d = reduce(draft, RemoveItem("b"))
    assert [it.description for it in d.items] == ["Sofa"]

from decimal import Decimal

import pytest

from storefront.domain.pricing import price_lines, to_minor_units


def test_small_cart_pays_shipping():
    priced = price_lines([(Decimal("20.00"), 2)])

    assert priced.subtotal == Decimal("40.00")
    assert priced.tax == Decimal("4.00")
    assert priced.shipping == Decimal("9.99")
    assert priced.total == Decimal("53.99")


def test_cart_above_threshold_ships_free():
    priced = price_lines([(Decimal("30.00"), 2)])

    assert priced.subtotal == Decimal("60.00")
    assert priced.tax == Decimal("6.00")
    assert priced.shipping == Decimal("0.00")
    assert priced.total == Decimal("66.00")


def test_threshold_is_strict():
    priced = price_lines([(Decimal("25.00"), 2)])

    assert priced.subtotal == Decimal("50.00")
    assert priced.shipping == Decimal("9.99")
    assert priced.total == Decimal("64.99")

    just_above = price_lines([(Decimal("50.01"), 1)])
    assert just_above.shipping == Decimal("0.00")


def test_subtotal_has_no_float_drift():
    priced = price_lines([(Decimal("0.10"), 3), (Decimal("0.20"), 1), (Decimal("19.99"), 7)])

    assert priced.subtotal == Decimal("140.43")
    assert priced.total == priced.subtotal + priced.tax + priced.shipping


def test_tax_rounds_half_up_to_cents():
    priced = price_lines([(Decimal("0.05"), 1)])

    assert priced.tax == Decimal("0.01")


def test_empty_and_zero_quantity_lines():
    assert price_lines([]).subtotal == Decimal("0.00")
    assert price_lines([(Decimal("12.00"), 0)]).total == Decimal("9.99")


def test_negative_input_rejected():
    with pytest.raises(ValueError):
        price_lines([(Decimal("-1.00"), 1)])
    with pytest.raises(ValueError):
        price_lines([(Decimal("1.00"), -1)])


def test_minor_units():
    assert to_minor_units(Decimal("53.99")) == 5399
    assert to_minor_units(Decimal("66.00")) == 6600
    assert to_minor_units(Decimal("0.5")) == 50

import pytest

from pizzahub.client.cart import Cart
from pizzahub.client.checkout import CheckoutForm, order_summary
from pizzahub.client.views import catalog_view, format_price

PRICES = {"extra_cheese": 150, "extra_meat": 200}


def make_cart():
    cart = Cart()
    cart.add({"id": 1, "name": "Margherita", "price": 450})
    cart.add({"id": 1, "name": "Margherita", "price": 450})
    cart.add({"id": 2, "name": "Pepperoni", "price": 520})
    return cart


def make_form(**overrides):
    fields = {"city": "Almaty", "address": "Abai 10", "phone": "+77010000000"}
    fields.update(overrides)
    return CheckoutForm(**fields)


def test_catalog_view_formats_prices():
    cards = catalog_view(
        [{"id": 1, "name": "Margherita", "description": "Basil", "price": 450, "category": "vegetarian", "image": "m.png"}],
        currency="₸",
    )

    assert len(cards) == 1
    assert cards[0].price_label == "450 ₸"
    assert cards[0].is_available is True
    assert cards[0].category == "vegetarian"


def test_format_price_default_currency():
    assert format_price(520) == "520 ₸"


def test_order_summary_counts_each_extra_once():
    summary = order_summary(make_cart(), ["extra_cheese", "extra_cheese", "extra_meat"], PRICES)

    assert summary.subtotal == 1420
    assert summary.extras_total == 350
    assert summary.total == 1770


def test_full_comment_composition():
    form = make_form(
        comment="Ring twice",
        scheduled_time="19:30",
        remove_ingredients=["onion", "unknown"],
        extras=["extra_cheese"],
    )

    assert form.full_comment(PRICES) == (
        "Ring twice\n"
        "Delivery time: 19:30\n"
        "Ingredients: Remove onion, Add extra cheese (+150 ₸)"
    )


def test_full_comment_empty_when_nothing_chosen():
    assert make_form().full_comment(PRICES) == ""


def test_payload():
    form = make_form(extras=["extra_meat"], comment="")

    payload = form.to_payload(make_cart(), PRICES)

    assert payload["items"] == [
        {"id": 1, "name": "Margherita", "price": 450, "quantity": 2},
        {"id": 2, "name": "Pepperoni", "price": 520, "quantity": 1},
    ]
    assert payload["total"] == 1620
    assert payload["address"] == "Almaty, Abai 10"
    assert payload["delivery_time"] is None
    assert payload["extras"] == ["extra_meat"]


def test_missing_fields_rejected():
    form = make_form(city=" ", phone="")

    with pytest.raises(ValueError, match="city, phone"):
        form.to_payload(make_cart(), PRICES)


def test_client_prices_do_not_follow_server_settings(monkeypatch):
    from pizzahub.config import settings

    monkeypatch.setattr(settings, "ORDER_EXTRAS", {"extra_cheese": 1})

    summary = order_summary(make_cart(), ["extra_cheese"])

    assert summary.extras_total == 150
    assert make_form(extras=["extra_cheese"]).full_comment() == "Ingredients: Add extra cheese (+150 ₸)"

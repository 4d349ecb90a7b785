"""Tests for the pure variant expansion."""
from types import SimpleNamespace

from storefront.services.variants import (
    build_option_placeholders,
    build_products_from_options,
    count_combinations,
    iter_combinations,
)

_next_id = iter(range(1, 10_000))


def option(name, *values):
    return SimpleNamespace(
        name=name,
        values=[SimpleNamespace(id=next(_next_id), value=v) for v in values],
    )


TEMPLATE = {"name": "Shirt", "price": 20.0, "quantity": 3, "not_a_column": "ignored"}


def test_shirt_expansion_order():
    options = [option("color", "red", "blue"), option("size", "S", "M")]
    products = build_products_from_options(TEMPLATE, "shirt", options)

    assert [p.sku for p in products] == [
        "shirt_red_s",
        "shirt_red_m",
        "shirt_blue_s",
        "shirt_blue_m",
    ]
    assert products[0].option_summary == "color: red, size: S"
    assert products[3].option_summary == "color: blue, size: M"


def test_products_carry_template_fields():
    products = build_products_from_options(TEMPLATE, "shirt", [option("color", "red")])
    assert len(products) == 1
    assert products[0].name == "Shirt"
    assert products[0].price == 20.0
    assert products[0].quantity == 3
    assert not hasattr(products[0], "not_a_column")


def test_applicable_option_values_follow_option_order():
    color, size = option("color", "red", "blue"), option("size", "S", "M", "L")
    products = build_products_from_options(TEMPLATE, "shirt", [color, size])

    for product in products:
        picked_color, picked_size = product.applicable_option_values
        assert picked_color in color.values
        assert picked_size in size.values
    assert products[1].applicable_option_values == [color.values[0], size.values[1]]


def test_count_is_product_of_cardinalities():
    options = [option("a", "x", "y"), option("b", "x", "y", "z"), option("c", "x", "y")]
    products = build_products_from_options(TEMPLATE, "p", options)
    assert len(products) == 12 == count_combinations(options)
    assert len({p.sku for p in products}) == 12


def test_option_without_values_yields_nothing():
    options = [option("color", "red", "blue"), option("size")]
    assert build_products_from_options(TEMPLATE, "shirt", options) == []
    assert count_combinations(options) == 0


def test_no_options_yields_nothing():
    assert list(iter_combinations([])) == []
    assert count_combinations([]) == 0


def test_single_option():
    products = build_products_from_options(TEMPLATE, "mug", [option("color", "Red", "Green")])
    assert [p.sku for p in products] == ["mug_red", "mug_green"]
    assert [p.option_summary for p in products] == ["color: Red", "color: Green"]


def test_expansion_is_deterministic():
    options = [option("color", "red", "blue", "green"), option("size", "S", "M")]
    placeholders = build_option_placeholders(options)
    first = list(iter_combinations(placeholders))
    second = list(iter_combinations(placeholders))
    assert first == second
    assert first[0].sku_fragments == ("red", "s")
    assert first[-1].sku_fragments == ("green", "m")


def test_placeholders_keep_value_order():
    color = option("color", "red", "blue")
    (placeholders,) = build_option_placeholders([color])
    assert [p.summary for p in placeholders] == ["color: red", "color: blue"]
    assert [p.original_value for p in placeholders] == color.values
    assert [p.id for p in placeholders] == [v.id for v in color.values]

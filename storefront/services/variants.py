"""Variant composition: expand a product template and its options into products.

Given options declared as ``color: [red, blue]`` and ``size: [S, M]`` and a
SKU prefix of ``shirt``, four products come out, in this order::

    shirt_red_s    color: red, size: S
    shirt_red_m    color: red, size: M
    shirt_blue_s   color: blue, size: S
    shirt_blue_m   color: blue, size: M

The first declared option is the outermost loop and the last one cycles
fastest. Everything here is pure: nothing touches the session.
"""
from dataclasses import dataclass

from storefront.models.product import Product

SUMMARY_SEPARATOR = ", "
SKU_SEPARATOR = "_"


@dataclass(frozen=True)
class OptionPlaceholder:
    """One option value, pre-rendered for summaries and SKUs."""

    id: int
    summary: str
    sku_fragment: str
    original_value: object


@dataclass(frozen=True)
class Combination:
    """One value per option, in option order."""

    summaries: tuple
    sku_fragments: tuple
    original_values: tuple


def build_option_placeholders(options):
    """Turn each option's values into placeholders, keeping value order.

    ``options`` is a sequence of objects with ``name`` and ``values``, where
    each value has ``id`` and ``value``. Returns one list per option.
    """
    placeholder_lists = []
    for option in options:
        placeholders = [
            OptionPlaceholder(
                id=value.id,
                summary=f"{option.name}: {value.value}",
                sku_fragment=value.value.lower(),
                original_value=value,
            )
            for value in option.values
        ]
        placeholder_lists.append(placeholders)
    return placeholder_lists


def _advance(index, placeholder_lists):
    """Step ``index`` to the next combination. Returns False once exhausted."""
    for position in range(len(index) - 1, -1, -1):
        index[position] += 1
        if index[position] < len(placeholder_lists[position]):
            return True
        index[position] = 0
    return False


def iter_combinations(placeholder_lists):
    """Yield every way of picking one placeholder per option.

    Walks an index vector like an odometer: the last counter increments,
    overflowing counters reset to zero and carry left, and the walk ends
    when the first counter overflows. No options, or any option without
    values, yields nothing.
    """
    if not placeholder_lists or any(len(p) == 0 for p in placeholder_lists):
        return

    index = [0] * len(placeholder_lists)
    while True:
        chosen = [placeholder_lists[i][k] for i, k in enumerate(index)]
        yield Combination(
            summaries=tuple(p.summary for p in chosen),
            sku_fragments=tuple(p.sku_fragment for p in chosen),
            original_values=tuple(p.original_value for p in chosen),
        )
        if not _advance(index, placeholder_lists):
            return


def count_combinations(options):
    total = 1 if options else 0
    for option in options:
        total *= len(option.values)
    return total


def new_product_from_template(template):
    """A fresh, unsaved Product carrying the template's shared fields."""
    return Product(**{k: v for k, v in template.items() if k in Product.TEMPLATE_FIELDS})


def materialize_product(template, combination, sku_prefix):
    product = new_product_from_template(template)
    product.option_summary = SUMMARY_SEPARATOR.join(combination.summaries)
    product.sku = SKU_SEPARATOR.join((sku_prefix,) + combination.sku_fragments)
    product.applicable_option_values = list(combination.original_values)
    return product


def build_products_from_options(template, sku_prefix, options):
    """Expand ``template`` into one unsaved Product per option combination."""
    placeholder_lists = build_option_placeholders(options)
    return [
        materialize_product(template, combination, sku_prefix)
        for combination in iter_combinations(placeholder_lists)
    ]

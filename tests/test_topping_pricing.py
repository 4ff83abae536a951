"""
Tests for the topping pricing engine.
"""
from decimal import Decimal

import pytest

from pizza_shop.services.topping_pricing import (
    INVALID_REPLACEMENT_ERROR,
    MISSING_REPLACED_TOPPING_ERROR,
    REPLACE_MEAT_WITH_VEGETABLE_ERROR,
    CustomizationTotal,
    ModificationType,
    SizeTier,
    Topping,
    ToppingCategory,
    ToppingModification,
    apply_modification,
    calculate_add_topping_charge,
    calculate_customization_total,
    can_split_pizza,
    free_add_allowance,
    get_topping_price,
    resolve_size_tier,
    validate_topping_replacement,
)


def replace(new, old):
    return ToppingModification(type="replace", topping=new, replaced_topping=old)


def add(topping):
    return ToppingModification(type="add", topping=topping)


def remove(topping):
    return ToppingModification(type="remove", topping=topping)


class TestSizeTiers:
    """Size strings map to price tiers by substring."""

    @pytest.mark.parametrize("size", ['10"', "Small", 'Small (10")', '9"', "small"])
    def test_small_sizes(self, size):
        assert resolve_size_tier(size) == SizeTier.SMALL

    @pytest.mark.parametrize("size", ['12"', "Medium", 'Medium (12")', '11"'])
    def test_medium_sizes(self, size):
        assert resolve_size_tier(size) == SizeTier.MEDIUM

    @pytest.mark.parametrize("size", ['14"', "Large", 'Large (14")', "LARGE"])
    def test_large_sizes(self, size):
        assert resolve_size_tier(size) == SizeTier.LARGE

    @pytest.mark.parametrize("size", ["", "party", '16"', "family size"])
    def test_unmatched_sizes_fall_back_to_medium(self, size):
        assert resolve_size_tier(size) == SizeTier.MEDIUM

    def test_none_falls_back_to_medium(self):
        assert resolve_size_tier(None) == SizeTier.MEDIUM

    def test_tier_passes_through(self):
        assert resolve_size_tier(SizeTier.LARGE) == SizeTier.LARGE
        assert resolve_size_tier(SizeTier.SMALL) == SizeTier.SMALL


class TestToppingPrices:
    """Prices come from the topping's tier price, in cents."""

    def test_price_per_tier(self, toppings):
        pepperoni = toppings["Pepperoni"]
        assert get_topping_price(pepperoni, '10"') == 249
        assert get_topping_price(pepperoni, '12"') == 299
        assert get_topping_price(pepperoni, '14"') == 349

    def test_unmatched_size_uses_medium_price(self, toppings):
        assert get_topping_price(toppings["Mushrooms"], "jumbo") == 299

    def test_tier_enum_accepted(self, toppings):
        assert get_topping_price(toppings["Ham"], SizeTier.LARGE) == 349

    def test_add_charge_equals_topping_price(self, toppings):
        for topping in toppings.values():
            for size in ('10"', '12"', '14"', "unknown"):
                assert calculate_add_topping_charge(topping, size) == get_topping_price(topping, size)

    def test_uneven_prices(self):
        truffle = Topping(
            id=None, name="Truffle", category="cheese",
            small_price="4.10", medium_price="5.255", large_price="6",
        )
        assert get_topping_price(truffle, '10"') == 410
        # Half-up rounding to the cent
        assert get_topping_price(truffle, '12"') == 526
        assert get_topping_price(truffle, '14"') == 600

    def test_category_coerced_from_string(self):
        topping = Topping(
            id=1, name="Spinach", category="vegetable",
            small_price="1", medium_price="1", large_price="1",
        )
        assert topping.category is ToppingCategory.VEGETABLE
        assert not topping.is_premium

    def test_unknown_category_rejected(self):
        with pytest.raises(ValueError):
            Topping(
                id=1, name="Gold Leaf", category="garnish",
                small_price="1", medium_price="1", large_price="1",
            )


class TestReplacementRules:
    """First replacement can be free; category rules decide."""

    def test_vegetable_for_vegetable_is_free(self, toppings):
        result = validate_topping_replacement(toppings["Mushrooms"], toppings["Onions"], '14"', 0)
        assert result.is_valid
        assert result.additional_charge_cents == 0
        assert result.error_message is None

    def test_meat_for_cheese_is_free(self, toppings):
        result = validate_topping_replacement(toppings["Pepperoni"], toppings["Extra Cheese"], '12"', 0)
        assert result.is_valid
        assert result.additional_charge_cents == 0

    def test_cheese_for_meat_is_free(self, toppings):
        result = validate_topping_replacement(toppings["Feta Cheese"], toppings["Bacon"], '10"', 0)
        assert result.is_valid
        assert result.additional_charge_cents == 0

    def test_meat_for_meat_is_free(self, toppings):
        result = validate_topping_replacement(toppings["Pepperoni"], toppings["Ham"], '14"', 0)
        assert result.is_valid
        assert result.additional_charge_cents == 0

    def test_vegetable_for_meat_charges_new_topping(self, toppings):
        result = validate_topping_replacement(toppings["Mushrooms"], toppings["Pepperoni"], '12"', 0)
        assert result.is_valid
        assert result.additional_charge_cents == 299
        assert result.additional_charge == Decimal("2.99")

    def test_meat_for_vegetable_is_rejected(self, toppings):
        result = validate_topping_replacement(toppings["Pepperoni"], toppings["Mushrooms"], '12"', 0)
        assert not result.is_valid
        assert result.additional_charge_cents == 0
        assert result.error_message == REPLACE_MEAT_WITH_VEGETABLE_ERROR

    def test_cheese_for_vegetable_is_rejected(self, toppings):
        result = validate_topping_replacement(toppings["Extra Cheese"], toppings["Onions"], '10"', 0)
        assert not result.is_valid
        assert result.error_message

    @pytest.mark.parametrize("original,new", [
        ("Mushrooms", "Onions"),
        ("Pepperoni", "Extra Cheese"),
        ("Mushrooms", "Pepperoni"),
        ("Pepperoni", "Mushrooms"),
    ])
    def test_after_first_replacement_always_valid_and_charged(self, toppings, original, new):
        result = validate_topping_replacement(toppings[original], toppings[new], '14"', 1)
        assert result.is_valid
        assert result.additional_charge_cents == get_topping_price(toppings[new], '14"')

    def test_many_prior_replacements_still_charged(self, toppings):
        result = validate_topping_replacement(toppings["Mushrooms"], toppings["Onions"], '10"', 5)
        assert result.is_valid
        assert result.additional_charge_cents == 249

    def test_generic_error_constant(self):
        assert INVALID_REPLACEMENT_ERROR


class TestSplitEligibility:
    """Half-and-half is only for medium/large, non-gluten-free pizzas."""

    @pytest.mark.parametrize("size", ['10"', '12"', '14"', "medium", "large", "anything"])
    def test_gluten_free_never_splits(self, size):
        assert can_split_pizza(size, True) is False

    def test_sizes(self):
        assert can_split_pizza('10"', False) is False
        assert can_split_pizza('12"', False) is True
        assert can_split_pizza('14"', False) is True
        assert can_split_pizza("Medium", False) is True
        assert can_split_pizza("Large", False) is True
        assert can_split_pizza("Small", False) is False

    def test_unmatched_size_cannot_split(self):
        # Pricing falls back to medium, but splitting needs an explicit match
        assert can_split_pizza("party", False) is False
        assert can_split_pizza(None, False) is False

    def test_tier_enum(self):
        assert can_split_pizza(SizeTier.SMALL, False) is False
        assert can_split_pizza(SizeTier.MEDIUM, False) is True
        assert can_split_pizza(SizeTier.LARGE, False) is True
        assert can_split_pizza(SizeTier.LARGE, True) is False


class TestFreeAddAllowance:
    def test_topper_pizzas(self):
        assert free_add_allowance("Two Topper") == 2
        assert free_add_allowance("three topper special") == 3

    def test_other_pizzas(self):
        assert free_add_allowance("Pepperoni") == 0
        assert free_add_allowance(None) == 0


class TestCustomizationTotal:
    """Walking an ordered list of modifications."""

    def test_two_replacements_on_large(self, toppings):
        mods = [
            replace(toppings["Pepperoni"], toppings["Mushrooms"]),
            replace(toppings["Bacon"], toppings["Onions"]),
        ]
        total = calculate_customization_total(mods, '14"', 0)
        assert total.total_cents == 349 + 349
        assert total.replacement_count == 2
        assert [p.charge_cents for p in total.accepted] == [349, 349]
        assert not total.has_rejections

    def test_add_extra_cheese_small(self, toppings):
        total = calculate_customization_total([add(toppings["Extra Cheese"])], '10"')
        assert total.total_cents == 249
        assert total.total == Decimal("2.49")
        assert total.formatted_total == "2.49"

    @pytest.mark.parametrize("size", ['10"', '12"', '14"', "weird"])
    def test_remove_is_free(self, toppings, size):
        total = calculate_customization_total([remove(toppings["Onions"])], size)
        assert total.total_cents == 0
        assert len(total.accepted) == 1

    def test_empty_modifications(self):
        total = calculate_customization_total([], '12"')
        assert total == CustomizationTotal()

    def test_first_free_swap_then_charged_swap(self, toppings):
        mods = [
            replace(toppings["Onions"], toppings["Mushrooms"]),
            replace(toppings["Mushrooms"], toppings["Green Peppers"]),
        ]
        total = calculate_customization_total(mods, '12"')
        assert [p.charge_cents for p in total.accepted] == [0, 299]
        assert total.total_cents == 299

    def test_order_decides_which_swap_is_free(self, toppings):
        veg_swap = replace(toppings["Onions"], toppings["Mushrooms"])
        upgrade = replace(toppings["Pepperoni"], toppings["Green Peppers"])

        assert calculate_customization_total([veg_swap, upgrade], '14"').total_cents == 349
        assert calculate_customization_total([upgrade, veg_swap], '14"').total_cents == 349 + 349

    def test_rejected_replacement_does_not_use_free_slot(self, toppings):
        mods = [
            replace(toppings["Mushrooms"], toppings["Pepperoni"]),
            replace(toppings["Onions"], toppings["Green Peppers"]),
        ]
        total = calculate_customization_total(mods, '12"')
        assert total.total_cents == 0
        assert total.replacement_count == 1
        assert len(total.rejected) == 1
        rejected = total.rejected[0]
        assert rejected.index == 0
        assert rejected.reason == REPLACE_MEAT_WITH_VEGETABLE_ERROR
        assert [p.index for p in total.accepted] == [1]

    def test_existing_replacements_consumes_free_slot(self, toppings):
        mods = [replace(toppings["Onions"], toppings["Mushrooms"])]
        total = calculate_customization_total(mods, '10"', existing_replacements=1)
        assert total.total_cents == 249
        assert total.replacement_count == 2

    def test_replace_without_replaced_topping_is_rejected(self, toppings):
        mod = ToppingModification(type=ModificationType.REPLACE, topping=toppings["Ham"])
        total = calculate_customization_total([mod], '12"')
        assert total.total_cents == 0
        assert total.replacement_count == 0
        assert total.rejected[0].reason == MISSING_REPLACED_TOPPING_ERROR

    def test_mixed_modifications(self, toppings):
        mods = [
            remove(toppings["Onions"]),
            add(toppings["Feta Cheese"]),
            replace(toppings["Ham"], toppings["Pepperoni"]),
            add(toppings["Mushrooms"]),
        ]
        total = calculate_customization_total(mods, '12"')
        assert total.total_cents == 299 + 0 + 299
        assert [p.charge_cents for p in total.accepted] == [0, 299, 0, 299]

    def test_free_adds(self, toppings):
        mods = [
            add(toppings["Pepperoni"]),
            add(toppings["Mushrooms"]),
            add(toppings["Bacon"]),
        ]
        total = calculate_customization_total(mods, '14"', free_adds=2)
        assert total.total_cents == 349
        assert total.free_adds_remaining == 0
        assert [p.charge_cents for p in total.accepted] == [0, 0, 349]

    def test_unused_free_adds_reported(self, toppings):
        total = calculate_customization_total([add(toppings["Ham"])], '12"', free_adds=3)
        assert total.total_cents == 0
        assert total.free_adds_remaining == 2

    def test_idempotent(self, toppings):
        mods = [
            replace(toppings["Pepperoni"], toppings["Mushrooms"]),
            add(toppings["Extra Cheese"]),
            replace(toppings["Mushrooms"], toppings["Bacon"]),
        ]
        first = calculate_customization_total(mods, '14"')
        second = calculate_customization_total(mods, '14"')
        assert first == second

    def test_accepts_generator(self, toppings):
        mods = (add(t) for t in (toppings["Ham"], toppings["Bacon"]))
        assert calculate_customization_total(mods, '10"').total_cents == 498


class TestApplyModification:
    """The single-step fold used by calculate_customization_total."""

    def test_does_not_mutate_state(self, toppings):
        state = CustomizationTotal()
        new_state = apply_modification(state, add(toppings["Ham"]), '12"')
        assert state.total_cents == 0
        assert new_state.total_cents == 299

    def test_threads_replacement_count(self, toppings):
        state = CustomizationTotal()
        state = apply_modification(state, replace(toppings["Onions"], toppings["Mushrooms"]), '12"', 0)
        assert state.replacement_count == 1
        state = apply_modification(state, replace(toppings["Mushrooms"], toppings["Onions"]), '12"', 1)
        assert state.replacement_count == 2
        assert state.total_cents == 299

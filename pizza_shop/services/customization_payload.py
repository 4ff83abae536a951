"""
Cart-line customization payloads.

A pizza's customizations are stored on its cart line as a JSON blob and
parsed back whenever the cart is displayed, edited, or checked out. This
module owns that round trip:

- CookingPreferences: sauce and bake preferences, with the storefront's
  mutual-exclusivity rules
- CustomizationPayload: the stored JSON shape (camelCase keys, so rows
  written by the storefront parse unchanged)
- ToppingCatalog: resolves stored topping names back to catalog toppings so
  a stored line can be re-priced by the engine

Stored shapes:
    Whole pizza:
        {"toppingModifications": [...], "cookingPreferences": {...},
         "isHalfAndHalf": false, "calculatedPrice": 18.48}
    Half-and-half:
        {"isHalfAndHalf": true, "leftHalf": {...}, "rightHalf": {...},
         "cookingPreferences": {...}, "calculatedPrice": 21.99}
    Legacy rows may hold a bare list of modifications.
"""

import json
import logging
from typing import Any, Iterable, List, Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, model_validator

from .half_and_half import HalfAndHalfQuote, HalfPizza, HalfQuote
from .money_utils import cents_to_decimal
from .topping_pricing import (
    CustomizationTotal,
    HalfPizzaSide,
    ModificationType,
    Topping,
    ToppingModification,
)

logger = logging.getLogger(__name__)


class CustomizationPayloadError(ValueError):
    """Raised when a stored customization payload can't be parsed."""


class UnknownToppingError(KeyError):
    """Raised when a stored modification names a topping not in the catalog."""


# =============================================================================
# Cooking Preferences
# =============================================================================

# Each preference and the one it cancels out
EXCLUSIVE_PREFERENCES = {
    "extra_sauce": "easy_sauce",
    "easy_sauce": "extra_sauce",
    "well_done": "extra_well_done",
    "extra_well_done": "well_done",
}


class CookingPreferences(BaseModel):
    """Sauce and bake preferences for a pizza."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    extra_sauce: bool = Field(False, alias="extraSauce")
    easy_sauce: bool = Field(False, alias="easySauce")
    well_done: bool = Field(False, alias="wellDone")
    extra_well_done: bool = Field(False, alias="extraWellDone")

    @model_validator(mode="after")
    def check_exclusive(self) -> "CookingPreferences":
        if self.extra_sauce and self.easy_sauce:
            raise ValueError("Extra sauce and easy sauce can't both be selected")
        if self.well_done and self.extra_well_done:
            raise ValueError("Well done and extra well done can't both be selected")
        return self

    def toggle(self, preference: str) -> "CookingPreferences":
        """
        Flip a preference. Turning one on turns its partner off.

        Raises:
            ValueError: If preference is not a known preference name
        """
        if preference not in EXCLUSIVE_PREFERENCES:
            raise ValueError(f"Unknown cooking preference: {preference}")

        values = self.model_dump()
        values[preference] = not values[preference]
        if values[preference]:
            values[EXCLUSIVE_PREFERENCES[preference]] = False
        return CookingPreferences(**values)


# =============================================================================
# Stored Payload
# =============================================================================

class StoredModification(BaseModel):
    """
    A topping modification as stored on a cart line.

    Rows written by the storefront's customizer use its own keys: the
    charge is `additionalCharge` (number or decimal string), the side is
    `halfPizza`, and toppings are nested objects under `topping` and
    `replacedTopping`. Those are read here and written back in the
    `price`/`half`/`toppingName` form.
    """
    model_config = ConfigDict(populate_by_name=True)

    type: Literal["add", "remove", "replace"]
    topping_id: Optional[int] = Field(None, alias="toppingId")
    topping_name: str = Field(alias="toppingName")
    replaced_topping_name: Optional[str] = Field(None, alias="replacedToppingName")
    price: float = Field(0.0, validation_alias=AliasChoices("price", "additionalCharge"))
    half: Literal["whole", "left", "right"] = Field(
        "whole", validation_alias=AliasChoices("half", "halfPizza")
    )

    @model_validator(mode="before")
    @classmethod
    def flatten_nested_toppings(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        topping = data.pop("topping", None)
        if isinstance(topping, dict):
            data.setdefault("toppingName", topping.get("name"))
            if topping.get("id") is not None:
                data.setdefault("toppingId", topping["id"])
        replaced = data.pop("replacedTopping", None)
        if isinstance(replaced, dict):
            data.setdefault("replacedToppingName", replaced.get("name"))
        return data


class StoredHalf(BaseModel):
    """One half of a stored half-and-half pizza."""
    model_config = ConfigDict(populate_by_name=True)

    base_pizza_name: Optional[str] = Field(None, alias="basePizzaName")
    base_pizza_id: Optional[int] = Field(None, alias="basePizzaId")
    base_pizza_price: float = Field(0.0, alias="basePizzaPrice")
    default_toppings: List[str] = Field(default_factory=list, alias="defaultToppings")
    topping_modifications: List[StoredModification] = Field(
        default_factory=list, alias="toppingModifications"
    )


class CustomizationPayload(BaseModel):
    """The customization JSON stored on a cart line."""
    model_config = ConfigDict(populate_by_name=True)

    topping_modifications: List[StoredModification] = Field(
        default_factory=list, alias="toppingModifications"
    )
    cooking_preferences: CookingPreferences = Field(
        default_factory=CookingPreferences, alias="cookingPreferences"
    )
    is_half_and_half: bool = Field(False, alias="isHalfAndHalf")
    left_half: Optional[StoredHalf] = Field(None, alias="leftHalf")
    right_half: Optional[StoredHalf] = Field(None, alias="rightHalf")
    special_instructions: Optional[str] = Field(None, alias="specialInstructions")
    calculated_price: Optional[float] = Field(None, alias="calculatedPrice")

    @model_validator(mode="after")
    def check_halves(self) -> "CustomizationPayload":
        if self.is_half_and_half and (self.left_half is None or self.right_half is None):
            raise ValueError("Half-and-half customizations need both halves")
        return self


def parse_customizations(raw: Union[str, bytes, None]) -> CustomizationPayload:
    """
    Parse a stored customization payload.

    Args:
        raw: JSON string from the cart line, or None

    Returns:
        CustomizationPayload. Empty/None input gives an empty whole-pizza payload.

    Raises:
        CustomizationPayloadError: If the JSON is malformed or has the wrong shape
    """
    if raw is None or (isinstance(raw, (str, bytes)) and not raw.strip()):
        return CustomizationPayload()

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CustomizationPayloadError(f"Customizations are not valid JSON: {e}") from e

    try:
        if isinstance(data, list):
            logger.debug("Parsing list-shaped customizations with %d modifications", len(data))
            return CustomizationPayload(
                topping_modifications=[StoredModification.model_validate(m) for m in data]
            )
        if isinstance(data, dict):
            return CustomizationPayload.model_validate(data)
    except ValidationError as e:
        raise CustomizationPayloadError(f"Customizations have an invalid shape: {e}") from e

    raise CustomizationPayloadError(
        f"Customizations must be a JSON object or list, got {type(data).__name__}"
    )


def serialize_customizations(payload: CustomizationPayload) -> str:
    """Serialize a payload to the stored JSON form (camelCase keys)."""
    return payload.model_dump_json(by_alias=True, exclude_none=True)


# =============================================================================
# Catalog Resolution
# =============================================================================

class ToppingCatalog:
    """
    Read-only topping lookup by id or name.

    Built from toppings the caller loaded; the catalog never fetches data
    itself.
    """

    def __init__(self, toppings: Iterable[Topping]):
        self._toppings = list(toppings)
        self._by_id = {t.id: t for t in self._toppings if t.id is not None}
        self._by_name = {t.name.lower(): t for t in self._toppings}

    def __len__(self) -> int:
        return len(self._toppings)

    def __iter__(self):
        return iter(self._toppings)

    def get(self, topping_id: Optional[int] = None, name: Optional[str] = None) -> Topping:
        """
        Look up a topping, preferring id over name.

        Raises:
            UnknownToppingError: If neither id nor name matches a catalog entry
        """
        if topping_id is not None and topping_id in self._by_id:
            return self._by_id[topping_id]
        if name and name.strip().lower() in self._by_name:
            return self._by_name[name.strip().lower()]
        raise UnknownToppingError(name if name else topping_id)


def resolve_modifications(
    stored: Iterable[StoredModification],
    catalog: ToppingCatalog,
) -> list[ToppingModification]:
    """
    Turn stored modifications back into engine modifications.

    Raises:
        UnknownToppingError: If a stored topping is no longer in the catalog
    """
    resolved = []
    for mod in stored:
        topping = catalog.get(mod.topping_id, mod.topping_name)
        replaced = None
        if mod.replaced_topping_name:
            replaced = catalog.get(name=mod.replaced_topping_name)
        resolved.append(ToppingModification(
            type=ModificationType(mod.type),
            topping=topping,
            replaced_topping=replaced,
            half=HalfPizzaSide(mod.half),
        ))
    return resolved


def to_stored_modifications(total: CustomizationTotal) -> list[StoredModification]:
    """Record the accepted modifications of a priced total, each with its charge."""
    return [
        StoredModification(
            type=priced.modification.type.value,
            topping_id=priced.modification.topping.id,
            topping_name=priced.modification.topping.name,
            replaced_topping_name=(
                priced.modification.replaced_topping.name
                if priced.modification.replaced_topping else None
            ),
            price=float(cents_to_decimal(priced.charge_cents)),
            half=priced.modification.half.value,
        )
        for priced in total.accepted
    ]


def build_payload(
    total: CustomizationTotal,
    base_price_cents: int,
    cooking_preferences: Optional[CookingPreferences] = None,
    special_instructions: Optional[str] = None,
) -> CustomizationPayload:
    """Build the stored payload for a whole (not half-and-half) pizza."""
    return CustomizationPayload(
        topping_modifications=to_stored_modifications(total),
        cooking_preferences=cooking_preferences or CookingPreferences(),
        is_half_and_half=False,
        special_instructions=special_instructions,
        calculated_price=float(cents_to_decimal(base_price_cents + total.total_cents)),
    )


def _stored_half(half: HalfPizza, quote: HalfQuote, base_pizza_id: Optional[int]) -> StoredHalf:
    return StoredHalf(
        base_pizza_name=half.base_pizza_name,
        base_pizza_id=base_pizza_id,
        base_pizza_price=float(cents_to_decimal(half.base_price_cents)),
        default_toppings=list(half.default_toppings),
        topping_modifications=to_stored_modifications(quote.customization),
    )


def build_half_and_half_payload(
    left: HalfPizza,
    right: HalfPizza,
    quote: HalfAndHalfQuote,
    cooking_preferences: Optional[CookingPreferences] = None,
    special_instructions: Optional[str] = None,
    left_pizza_id: Optional[int] = None,
    right_pizza_id: Optional[int] = None,
) -> CustomizationPayload:
    """Build the stored payload for a half-and-half pizza."""
    return CustomizationPayload(
        cooking_preferences=cooking_preferences or CookingPreferences(),
        is_half_and_half=True,
        left_half=_stored_half(left, quote.left, left_pizza_id),
        right_half=_stored_half(right, quote.right, right_pizza_id),
        special_instructions=special_instructions,
        calculated_price=float(cents_to_decimal(quote.total_cents)),
    )

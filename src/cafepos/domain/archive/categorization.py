from __future__ import annotations

from cafepos.domain.menu.entities import Category

# Checked in order; the first list with a keyword contained in the name wins.
DRINK_ADD_ON_KEYWORDS = (
    "oatmilk",
    "oat milk",
    "almond milk",
    "soy milk",
    "coconut milk",
    "milk",
    "syrup",
    "vanilla syrup",
    "caramel syrup",
    "hazelnut syrup",
    "extra shot",
    "shot",
    "espresso shot",
    "decaf",
    "sugar",
    "sweetener",
    "stevia",
    "honey",
)

FOOD_ADD_ON_KEYWORDS = (
    "telur",
    "egg",
    "eggs",
    "cheese",
    "bacon",
    "ham",
    "chicken",
    "beef",
    "mushroom",
    "tomato",
    "lettuce",
    "onion",
    "avocado",
    "mayo",
    "sauce",
    "butter",
    "cream cheese",
    "extra cheese",
    "protein",
)

DRINK_KEYWORDS = (
    "iced",
    "latte",
    "coffee",
    "americano",
    "macchiato",
    "mocha",
    "chocolate",
    "strawberry",
    "caramel",
    "vanilla",
    "spanish",
)

FOOD_KEYWORDS = (
    "cookie",
    "cookies",
    "cake",
    "wrap",
    "cheese",
    "indomie",
    "maggi",
    "moist",
    "chip",
    "assorted",
    "big cookie",
    "loaded",
    "chicken",
)

_RULES: tuple[tuple[tuple[str, ...], Category], ...] = (
    (DRINK_ADD_ON_KEYWORDS, Category.DRINK),
    (FOOD_ADD_ON_KEYWORDS, Category.FOOD),
    (DRINK_KEYWORDS, Category.DRINK),
    (FOOD_KEYWORDS, Category.FOOD),
)


def classify(name: str) -> Category:
    """Guess whether an imported line item is a drink or food.

    Unknown names default to food.
    """
    normalized = name.strip().lower()
    for keywords, category in _RULES:
        if any(keyword in normalized for keyword in keywords):
            return category
    return Category.FOOD

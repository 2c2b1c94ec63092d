"""Keyword-based food classification for menu items."""

from dataclasses import fields

from campus_dining.domain.classification import PROTEIN_CATEGORIES, FoodClassification
from campus_dining.domain.menus import MenuItem

LONG_KEYWORD_CONFIDENCE = 0.9
SHORT_KEYWORD_CONFIDENCE = 0.7
LONG_KEYWORD_MIN_LENGTH = 7
DOMINANT_PROTEIN_THRESHOLD = 0.5
DOMINATED_PROTEIN_FACTOR = 0.3
MEATLESS_VEGETARIAN_FLOOR = 0.6

# fmt: off
FOOD_PATTERNS: dict[str, tuple[str, ...]] = {
    "seafood": (
        "pollock", "fish", "salmon", "shrimp", "tuna", "clam", "seafood",
        "cioppino", "manhattan clam chowder", "shrimp fried rice", "crab",
        "lobster", "scallop", "cod", "halibut", "mahi mahi", "tilapia",
        "catfish", "sea bass", "mussels",
    ),
    "poultry": (
        "chicken", "turkey", "poultry", "buffalo chicken", "bbq chicken",
        "fried chicken", "chicken tikka", "korean bbq chicken", "chicken thigh",
        "chicken breast", "chicken drumstick", "chicken nugget",
        "chicken cordon", "orange chicken",
    ),
    "beef_pork": (
        "beef", "pork", "burger", "cheeseburger", "hamburger", "pulled pork",
        "bacon", "sausage", "meatball", "gyro", "bbq pork", "bulgogi",
        "taco beef", "spicy beef",
    ),
    "vegetarian": (
        "vegetarian", "veggie", "tofu", "hummus", "falafel", "cheese pizza",
        "mac and cheese", "pasta", "eggplant", "quinoa", "lentil", "chickpea",
        "black bean burger", "veggie supreme", "marinara", "alfredo",
    ),
    "vegan": (
        "vegan", "plant-based", "meatless", "chick'n", "dairy-free", "tofu",
        "tempeh", "seitan", "coconut milk", "almond", "soy",
    ),
    "protein_rich": (
        "chicken", "beef", "pork", "fish", "salmon", "tuna", "shrimp", "turkey",
        "tofu", "eggs", "quinoa", "lentil", "chickpea", "beans", "cheese",
        "yogurt", "protein", "masala", "tikka",
    ),
    "healthy_option": (
        "salad", "steamed", "grilled", "roasted", "fresh fruit", "vegetables",
        "quinoa", "brown rice", "whole grain", "organic", "harvest salad",
        "yogurt", "hummus", "broccoli", "carrots", "green beans",
    ),
    "fried_food": (
        "fried", "crispy", "breaded", "battered", "fries", "nuggets",
        "fried chicken", "fried rice", "tempura", "spring roll", "fritters",
        "fried potato", "popcorn chicken",
    ),
    "comfort_food": (
        "mac and cheese", "pizza", "burger", "fries", "mashed potato",
        "comfort", "casserole", "gravy", "cheese sauce", "fried chicken",
        "pot pie", "meatloaf", "chili",
    ),
    "asian": (
        "asian", "chinese", "korean", "thai", "japanese", "stir fry", "wok",
        "teriyaki", "sesame", "ginger", "soy sauce", "kimchi", "bulgogi",
        "lo mein", "fried rice", "dumpling", "pot sticker", "ramen",
        "szechuan", "orange chicken", "sweet and sour", "jasmine rice",
        "egg drop soup", "hot and sour", "udon", "curry", "pad thai",
    ),
    "italian": (
        "pasta", "pizza", "italian", "marinara", "alfredo", "parmesan",
        "mozzarella", "basil", "pesto", "risotto", "gnocchi", "ravioli",
        "tortellini", "lasagna", "spaghetti", "penne", "farfalle", "gemelli",
        "fettuccine", "linguine", "rigatoni", "fusilli", "capellini",
        "angel hair", "bolognese", "carbonara", "aglio e olio", "cacio e pepe",
        "arrabbiata", "puttanesca", "primavera", "romano", "pecorino",
        "ricotta", "provolone", "focaccia", "ciabatta", "bruschetta",
        "antipasto", "caprese", "minestrone", "italian sausage", "prosciutto",
        "pancetta", "salami", "mortadella",
    ),
    "mexican": (
        "mexican", "taco", "burrito", "quesadilla", "salsa", "guacamole",
        "chipotle", "jalapeño", "cilantro", "lime", "enchilada", "fajita",
        "nachos", "tortilla", "pico de gallo", "black bean", "corn salsa",
        "ancho chili", "birria", "peruvian",
    ),
    "american": (
        "american", "burger", "fries", "bbq", "sandwich", "hot dog", "classic",
        "southern", "nashville", "carolina", "buffalo", "ranch", "cheddar",
        "bacon", "pulled pork", "coleslaw",
    ),
    "indian": (
        "indian", "curry", "tikka", "masala", "tandoor", "naan", "basmati",
        "turmeric", "cumin", "coriander", "garam masala", "dal", "chana",
        "biryani", "vindaloo", "korma", "makhani", "chutney",
    ),
    "breakfast_food": (
        "breakfast", "pancake", "waffle", "eggs", "bacon", "sausage", "cereal",
        "oatmeal", "bagel", "muffin", "toast", "hash browns", "scrambled",
        "omelet", "frittata", "continental breakfast",
    ),
    "dessert": (
        "dessert", "cake", "pie", "cookie", "ice cream", "chocolate", "sweet",
        "waffle bar", "bread pudding", "bars", "treats", "pastries",
        "vegan chocolate cake",
    ),
}
# fmt: on


def item_text(item: MenuItem) -> str:
    """Return the lowercased text a menu item is classified on."""
    return f"{item.name or ''} {item.category or ''}".lower()


def keyword_confidence(keyword: str) -> float:
    """Confidence awarded for a matched keyword."""
    if len(keyword) >= LONG_KEYWORD_MIN_LENGTH:
        return LONG_KEYWORD_CONFIDENCE
    return SHORT_KEYWORD_CONFIDENCE


def match_scores(text: str) -> dict[str, float]:
    """Score every category by its best matching keyword."""
    scores: dict[str, float] = {}
    for category, keywords in FOOD_PATTERNS.items():
        scores[category] = max(
            (keyword_confidence(kw) for kw in keywords if kw in text),
            default=0.0,
        )
    return scores


def dampen_proteins(scores: dict[str, float]) -> dict[str, float]:
    """Reduce protein categories dominated by a confident protein category.

    When the strongest protein score exceeds the dominance threshold, every
    protein score strictly below it is multiplied by the dampening factor.
    With no protein match at all, the vegetarian score is floored.
    """
    adjusted = dict(scores)
    top = max(adjusted.get(name, 0.0) for name in PROTEIN_CATEGORIES)
    if top > DOMINANT_PROTEIN_THRESHOLD:
        for name in PROTEIN_CATEGORIES:
            if adjusted.get(name, 0.0) < top:
                adjusted[name] = adjusted.get(name, 0.0) * DOMINATED_PROTEIN_FACTOR
    if top == 0:
        adjusted["vegetarian"] = max(
            adjusted.get("vegetarian", 0.0), MEATLESS_VEGETARIAN_FLOOR
        )
    return adjusted


def classify_text(text: str | None) -> FoodClassification:
    """Classify lowercased item text into category confidences."""
    scores = dampen_proteins(match_scores((text or "").lower()))
    return FoodClassification(**scores)


def classify_item(item: MenuItem) -> FoodClassification:
    """Classify a menu item by its name and category."""
    return classify_text(item_text(item))


def top_categories(
    classification: FoodClassification, threshold: float = 0.5, limit: int = 3
) -> list[str]:
    """Return the strongest categories at or above a threshold."""
    scores = classification.as_dict()
    order = [f.name for f in fields(FoodClassification)]
    ranked = sorted(
        (name for name in order if scores[name] >= threshold),
        key=lambda name: (-scores[name], order.index(name)),
    )
    return ranked[:limit]

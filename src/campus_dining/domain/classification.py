"""Food classification result model."""

from dataclasses import asdict, dataclass

PROTEIN_CATEGORIES = ("seafood", "poultry", "beef_pork")


@dataclass(frozen=True)
class FoodClassification:
    """Confidence per food category, each in [0, 1]."""

    seafood: float = 0.0
    poultry: float = 0.0
    beef_pork: float = 0.0
    vegetarian: float = 0.0
    vegan: float = 0.0
    protein_rich: float = 0.0
    healthy_option: float = 0.0
    fried_food: float = 0.0
    comfort_food: float = 0.0
    asian: float = 0.0
    italian: float = 0.0
    mexican: float = 0.0
    american: float = 0.0
    indian: float = 0.0
    breakfast_food: float = 0.0
    dessert: float = 0.0

    def as_dict(self) -> dict[str, float]:
        """Return scores keyed by category name."""
        return asdict(self)

"""Data models for inventory, recipes, shopping list and impact statistics.

Records are persisted as camelCase JSON objects; ``to_dict`` / ``from_dict``
convert between that wire shape and the dataclasses used in code.
"""

from __future__ import annotations

from dataclasses import dataclass, field

CATEGORIES: tuple[str, ...] = (
    "dairy",
    "meat",
    "vegetables",
    "fruits",
    "grains",
    "beverages",
    "condiments",
    "frozen",
    "bakery",
    "other",
)

CATEGORY_LABELS: dict[str, str] = {
    "dairy": "Молочные",
    "meat": "Мясо",
    "vegetables": "Овощи",
    "fruits": "Фрукты",
    "grains": "Крупы",
    "beverages": "Напитки",
    "condiments": "Приправы",
    "frozen": "Заморозка",
    "bakery": "Выпечка",
    "other": "Другое",
}

DIFFICULTIES: tuple[str, ...] = ("easy", "medium", "hard")

DIFFICULTY_LABELS: dict[str, str] = {
    "easy": "Легко",
    "medium": "Средне",
    "hard": "Сложно",
}

STAT_KEYS: tuple[str, ...] = (
    "money_saved",
    "time_saved",
    "waste_prevented",
    "recipes_generated",
    "products_scanned",
)


def _category(value: object) -> str:
    return value if value in CATEGORIES else "other"


@dataclass
class Product:
    """A perishable item in the fridge."""

    id: str
    name: str
    quantity: str  # free text: "1", "0.5", "2-3"
    unit: str
    category: str  # one of CATEGORIES
    expiry_date: str  # ISO date
    added_at: str
    confidence: float | None = None  # set by image recognition

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "quantity": self.quantity,
            "unit": self.unit,
            "category": self.category,
            "expiryDate": self.expiry_date,
            "addedAt": self.added_at,
        }
        if self.confidence is not None:
            data["confidence"] = self.confidence
        return data

    @classmethod
    def from_dict(cls, data: dict) -> Product:
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            quantity=str(data.get("quantity", "1")),
            unit=data.get("unit", "шт"),
            category=_category(data.get("category")),
            expiry_date=data["expiryDate"],
            added_at=data.get("addedAt", ""),
            confidence=data.get("confidence"),
        )


@dataclass
class RecipeIngredient:
    name: str
    amount: str = ""
    unit: str = ""
    available: bool = False  # already in the fridge

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "amount": self.amount,
            "unit": self.unit,
            "available": self.available,
        }

    @classmethod
    def from_dict(cls, data: dict) -> RecipeIngredient:
        return cls(
            name=str(data.get("name") or ""),
            amount=str(data.get("amount") or ""),
            unit=str(data.get("unit") or ""),
            available=bool(data.get("available", False)),
        )


@dataclass
class Recipe:
    """A generated recipe."""

    id: str
    title: str
    description: str = ""
    cook_time: int = 30  # minutes
    servings: int = 4
    difficulty: str = "medium"
    ingredients: list[RecipeIngredient] = field(default_factory=list)
    instructions: list[str] = field(default_factory=list)
    uses_expiring_products: list[str] = field(default_factory=list)
    generated_at: str = ""
    saved_at: str | None = None
    estimated_cost: float | None = None

    def missing_ingredients(self) -> list[RecipeIngredient]:
        """Ingredients that are not in the fridge."""
        return [i for i in self.ingredients if not i.available]

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "cookTime": self.cook_time,
            "servings": self.servings,
            "difficulty": self.difficulty,
            "ingredients": [i.to_dict() for i in self.ingredients],
            "instructions": list(self.instructions),
            "usesExpiringProducts": list(self.uses_expiring_products),
            "generatedAt": self.generated_at,
        }
        if self.saved_at is not None:
            data["savedAt"] = self.saved_at
        if self.estimated_cost is not None:
            data["estimatedCost"] = self.estimated_cost
        return data

    @classmethod
    def from_dict(cls, data: dict) -> Recipe:
        return cls(
            id=data["id"],
            title=data.get("title", ""),
            description=data.get("description", ""),
            cook_time=data.get("cookTime", 30),
            servings=data.get("servings", 4),
            difficulty=data.get("difficulty", "medium"),
            ingredients=[
                RecipeIngredient.from_dict(i) for i in data.get("ingredients", [])
            ],
            instructions=list(data.get("instructions", [])),
            uses_expiring_products=list(data.get("usesExpiringProducts", [])),
            generated_at=data.get("generatedAt", ""),
            saved_at=data.get("savedAt"),
            estimated_cost=data.get("estimatedCost"),
        )


@dataclass
class ShoppingItem:
    id: str
    name: str
    quantity: str = "1"
    unit: str = "шт"
    category: str = "other"
    checked: bool = False
    added_at: str = ""
    from_recipe: str | None = None  # title of the originating recipe

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "quantity": self.quantity,
            "unit": self.unit,
            "category": self.category,
            "checked": self.checked,
            "addedAt": self.added_at,
        }
        if self.from_recipe is not None:
            data["fromRecipe"] = self.from_recipe
        return data

    @classmethod
    def from_dict(cls, data: dict) -> ShoppingItem:
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            quantity=str(data.get("quantity", "1")),
            unit=data.get("unit", "шт"),
            category=_category(data.get("category")),
            checked=bool(data.get("checked", False)),
            added_at=data.get("addedAt", ""),
            from_recipe=data.get("fromRecipe"),
        )


@dataclass
class ImpactStats:
    """Running totals; only ever incremented except by a full reset."""

    money_saved: float = 0.0
    time_saved: float = 0.0  # minutes
    waste_prevented: float = 0.0  # kg
    recipes_generated: int = 0
    products_scanned: int = 0
    last_updated: str = ""

    def to_dict(self) -> dict:
        return {
            "moneySaved": self.money_saved,
            "timeSaved": self.time_saved,
            "wastePrevented": self.waste_prevented,
            "recipesGenerated": self.recipes_generated,
            "productsScanned": self.products_scanned,
            "lastUpdated": self.last_updated,
        }

    @classmethod
    def from_dict(cls, data: dict) -> ImpactStats:
        return cls(
            money_saved=data.get("moneySaved", 0.0),
            time_saved=data.get("timeSaved", 0.0),
            waste_prevented=data.get("wastePrevented", 0.0),
            recipes_generated=data.get("recipesGenerated", 0),
            products_scanned=data.get("productsScanned", 0),
            last_updated=data.get("lastUpdated", ""),
        )


@dataclass
class Beverage:
    name: str
    quantity: str = ""

    def to_dict(self) -> dict:
        return {"name": self.name, "quantity": self.quantity}


@dataclass
class GuestMenu:
    """A multi-course menu for a party of guests."""

    guest_count: int
    budget: str  # economy | standard | premium
    city: str
    appetizers: list[Recipe] = field(default_factory=list)
    mains: list[Recipe] = field(default_factory=list)
    desserts: list[Recipe] = field(default_factory=list)
    beverages: list[Beverage] = field(default_factory=list)
    shopping_list: list[ShoppingItem] = field(default_factory=list)
    total_cost: float = 0.0
    per_person_cost: float = 0.0

    def dishes(self) -> list[Recipe]:
        return [*self.appetizers, *self.mains, *self.desserts]

    def to_dict(self) -> dict:
        return {
            "guestCount": self.guest_count,
            "budget": self.budget,
            "city": self.city,
            "courses": {
                "appetizers": [r.to_dict() for r in self.appetizers],
                "mains": [r.to_dict() for r in self.mains],
                "desserts": [r.to_dict() for r in self.desserts],
                "beverages": [b.to_dict() for b in self.beverages],
            },
            "shoppingList": [i.to_dict() for i in self.shopping_list],
            "totalCost": self.total_cost,
            "perPersonCost": self.per_person_cost,
        }


@dataclass
class ChatMessage:
    id: str
    role: str  # "user" | "assistant"
    content: str
    timestamp: str


@dataclass
class OnboardingState:
    completed: bool = False
    current_step: int = 0

    def to_dict(self) -> dict:
        return {"completed": self.completed, "currentStep": self.current_step}

    @classmethod
    def from_dict(cls, data: dict) -> OnboardingState:
        return cls(
            completed=bool(data.get("completed", False)),
            current_step=int(data.get("currentStep", 0)),
        )

"""Expiry-aware fridge inventory and recipe assistant."""

from .assistant import MealMindAssistant, ResultGuard
from .config import (
    GenerationConfig,
    MealMindConfig,
    ProfileConfig,
    RecommendationConfig,
    StorageConfig,
    load_config,
)
from .errors import (
    ConfigurationError,
    GenerationParseError,
    MealMindError,
    NotFoundError,
    TransportError,
    ValidationError,
)
from .expiry import classify, days_remaining, describe
from .generation import GenerationBackend, create_backend
from .models import (
    GuestMenu,
    ImpactStats,
    Product,
    Recipe,
    RecipeIngredient,
    ShoppingItem,
)
from .planner import WeekPlan, WeekPlanner
from .ranking import (
    estimate_savings,
    group_by_category,
    recipe_savings,
    select_expiring,
    sort_by_urgency,
)

__all__ = [
    "MealMindAssistant",
    "ResultGuard",
    "WeekPlan",
    "WeekPlanner",
    "GenerationBackend",
    "create_backend",
    "Product",
    "Recipe",
    "RecipeIngredient",
    "ShoppingItem",
    "GuestMenu",
    "ImpactStats",
    "classify",
    "days_remaining",
    "describe",
    "sort_by_urgency",
    "select_expiring",
    "estimate_savings",
    "recipe_savings",
    "group_by_category",
    "MealMindError",
    "ConfigurationError",
    "TransportError",
    "GenerationParseError",
    "NotFoundError",
    "ValidationError",
    "MealMindConfig",
    "GenerationConfig",
    "StorageConfig",
    "RecommendationConfig",
    "ProfileConfig",
    "load_config",
]

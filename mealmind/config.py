"""TOML configuration loader for MealMind."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore[assignment]


@dataclass
class GeminiConfig:
    api_key: str = ""
    model: str = "gemini-2.0-flash"


@dataclass
class ClaudeConfig:
    api_key: str = ""
    model: str = "claude-sonnet-4-5-20250929"


@dataclass
class GenerationConfig:
    backend: str = "gemini"
    gemini: GeminiConfig = field(default_factory=GeminiConfig)
    claude: ClaudeConfig = field(default_factory=ClaudeConfig)


@dataclass
class StorageConfig:
    path: str = "~/.config/mealmind/mealmind.db"


@dataclass
class RecommendationConfig:
    expiring_within_days: int = 3
    savings_per_item: float = 150.0
    weigh_by_quantity: bool = False
    default_servings: int = 4
    history_limit: int = 50


@dataclass
class ProfileConfig:
    city: str = "Бишкек"
    delivery_service: str = "glovo"


@dataclass
class MealMindConfig:
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    recommendation: RecommendationConfig = field(
        default_factory=RecommendationConfig
    )
    profile: ProfileConfig = field(default_factory=ProfileConfig)


def load_config(path: str | Path | None = None) -> MealMindConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if no path is given or the file doesn't exist.
    API keys can be overridden via environment variables.
    """
    raw: dict = {}

    if path is not None:
        p = Path(path)
        if p.exists():
            if tomllib is None:
                raise ImportError(
                    "tomli is required on Python < 3.11: pip install tomli"
                )
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    gen = raw.get("generation", {})
    sto = raw.get("storage", {})
    rec = raw.get("recommendation", {})
    prf = raw.get("profile", {})

    gemini_cfg = gen.get("gemini", {})
    claude_cfg = gen.get("claude", {})

    # Resolve API keys: config file → environment variable
    gemini_api_key = (
        gemini_cfg.get("api_key", "")
        or os.environ.get("GEMINI_API_KEY", "")
        or os.environ.get("GOOGLE_API_KEY", "")
    )
    claude_api_key = claude_cfg.get("api_key", "") or os.environ.get(
        "ANTHROPIC_API_KEY", ""
    )

    defaults = RecommendationConfig()

    return MealMindConfig(
        generation=GenerationConfig(
            backend=gen.get("backend", "gemini"),
            gemini=GeminiConfig(
                api_key=gemini_api_key,
                model=gemini_cfg.get("model", "gemini-2.0-flash"),
            ),
            claude=ClaudeConfig(
                api_key=claude_api_key,
                model=claude_cfg.get("model", "claude-sonnet-4-5-20250929"),
            ),
        ),
        storage=StorageConfig(
            path=sto.get("path", "~/.config/mealmind/mealmind.db"),
        ),
        recommendation=RecommendationConfig(
            expiring_within_days=rec.get(
                "expiring_within_days", defaults.expiring_within_days
            ),
            savings_per_item=rec.get("savings_per_item", defaults.savings_per_item),
            weigh_by_quantity=rec.get(
                "weigh_by_quantity", defaults.weigh_by_quantity
            ),
            default_servings=rec.get("default_servings", defaults.default_servings),
            history_limit=rec.get("history_limit", defaults.history_limit),
        ),
        profile=ProfileConfig(
            city=prf.get("city", "Бишкек"),
            delivery_service=prf.get("delivery_service", "glovo"),
        ),
    )

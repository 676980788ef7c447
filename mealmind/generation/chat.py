"""Prompt construction for the cooking-assistant chat."""

from __future__ import annotations

from ..errors import GenerationParseError
from ..models import ChatMessage, Product

_SYSTEM_PROMPT = """\
Ты - MealMind, дружелюбный AI-помощник по кулинарии для семей в Кыргызстане.

Твои задачи:
- Помогать с вопросами о готовке и рецептах
- Давать советы по хранению продуктов
- Предлагать идеи блюд из имеющихся продуктов
- Советовать как использовать продукты до истечения срока годности
- Отвечать на русском языке кратко и по делу"""

_ROLE_LABELS = {"user": "Пользователь", "assistant": "MealMind"}


def build_chat_prompt(
    message: str,
    history: list[ChatMessage] | tuple = (),
    products: list[Product] | tuple = (),
    recent_recipes: list[str] | tuple = (),
) -> str:
    """Single prompt carrying the user context, prior turns and the new message."""
    parts = [_SYSTEM_PROMPT, "", "Контекст пользователя:"]
    if products:
        parts.append("Текущие продукты в холодильнике:")
        parts.extend(f"- {p.name} ({p.quantity} {p.unit})" for p in products)
    if recent_recipes:
        parts.append(f"Недавние рецепты: {', '.join(recent_recipes)}")
    parts.append("")
    parts.append(
        "Отвечай кратко, дружелюбно и полезно. "
        "Используй сом (с) для цен в Кыргызстане."
    )

    if history:
        parts.append("")
        parts.append("История разговора:")
        for turn in history:
            label = _ROLE_LABELS.get(turn.role, turn.role)
            parts.append(f"{label}: {turn.content}")

    parts.append("")
    parts.append(f"Вопрос пользователя: {message}")
    return "\n".join(parts)


def parse_chat_reply(text: str) -> str:
    reply = text.strip()
    if not reply:
        raise GenerationParseError("Не удалось получить ответ")
    return reply

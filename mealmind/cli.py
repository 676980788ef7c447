"""CLI entry point for MealMind."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from dotenv import load_dotenv

from .assistant import MealMindAssistant
from .config import load_config
from .db import new_product, new_shopping_item
from .errors import MealMindError
from .expiry import classify, describe
from .generation.recipes import RecipeConstraints
from .helpers import delivery_links, format_minutes, truncate
from .models import CATEGORIES, CATEGORY_LABELS, DIFFICULTY_LABELS, Recipe
from .ranking import (
    count_by_status,
    estimate_savings,
    group_by_category,
    select_expiring,
    sort_by_urgency,
)

_STATUS_ICONS = {"critical": "🔴", "warning": "🟡", "fresh": "🟢"}


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="mealmind",
        description="MealMind: продукты в холодильнике, сроки годности и рецепты",
    )
    parser.add_argument(
        "--config", "-c", type=str, default=None, help="Путь к файлу настроек (TOML)"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Подробный вывод журнала"
    )

    sub = parser.add_subparsers(dest="command")

    # scan
    scan_parser = sub.add_parser("scan", help="Распознать продукты на фото")
    scan_parser.add_argument("--image", type=str, nargs="+", required=True)
    scan_parser.add_argument("--min-confidence", type=float, default=0.5)
    scan_parser.add_argument(
        "--dry-run", action="store_true", help="Только показать, не сохранять"
    )
    scan_parser.add_argument("--json", action="store_true", help="Вывод в JSON")

    # inventory
    inv_parser = sub.add_parser("inventory", help="Продукты в холодильнике")
    inv_parser.add_argument("--group", action="store_true", help="По категориям")
    inv_parser.add_argument("--json", action="store_true", help="Вывод в JSON")

    # add / remove
    add_parser = sub.add_parser("add", help="Добавить продукт вручную")
    add_parser.add_argument("name", type=str)
    add_parser.add_argument("--quantity", type=str, default="1")
    add_parser.add_argument("--unit", type=str, default="шт")
    add_parser.add_argument("--category", type=str, default="other", choices=CATEGORIES)
    add_parser.add_argument("--expiry", type=str, default=None, help="ГГГГ-ММ-ДД")

    remove_parser = sub.add_parser("remove", help="Удалить продукт")
    remove_parser.add_argument("id", type=str)

    # expiring
    exp_parser = sub.add_parser("expiring", help="Продукты, которые скоро испортятся")
    exp_parser.add_argument("--days", type=int, default=None)

    # recipe
    recipe_parser = sub.add_parser("recipe", help="Сгенерировать рецепт")
    recipe_parser.add_argument(
        "--select", type=str, nargs="+", default=None, metavar="ID",
        help="Использовать только эти продукты",
    )
    recipe_parser.add_argument("--servings", type=int, default=None)
    recipe_parser.add_argument("--max-time", type=int, default=None)
    recipe_parser.add_argument(
        "--difficulty", type=str, default=None, choices=sorted(DIFFICULTY_LABELS)
    )
    recipe_parser.add_argument("--save", action="store_true", help="Сохранить рецепт")
    recipe_parser.add_argument(
        "--add-missing", action="store_true",
        help="Добавить недостающие ингредиенты в список покупок",
    )
    recipe_parser.add_argument("--json", action="store_true", help="Вывод в JSON")

    # saved / history
    sub.add_parser("saved", help="Сохранённые рецепты")
    unsave_parser = sub.add_parser("unsave", help="Удалить из сохранённых")
    unsave_parser.add_argument("id", type=str)
    sub.add_parser("history", help="История рецептов")

    # plan
    plan_parser = sub.add_parser("plan", help="План питания на неделю")
    plan_parser.add_argument(
        "--add-missing", action="store_true",
        help="Добавить недостающие ингредиенты в список покупок",
    )

    # menu
    menu_parser = sub.add_parser("menu", help="Меню для гостей")
    menu_parser.add_argument("--guests", type=int, required=True)
    menu_parser.add_argument(
        "--budget", type=str, default="standard",
        choices=["economy", "standard", "premium"],
    )
    menu_parser.add_argument("--city", type=str, default=None)
    menu_parser.add_argument(
        "--add-to-list", action="store_true", help="Добавить покупки в список"
    )
    menu_parser.add_argument("--json", action="store_true", help="Вывод в JSON")

    # shopping
    shop_parser = sub.add_parser("shopping", help="Список покупок")
    shop_sub = shop_parser.add_subparsers(dest="action")
    shop_sub.add_parser("list")
    shop_add = shop_sub.add_parser("add")
    shop_add.add_argument("name", type=str)
    shop_add.add_argument("--quantity", type=str, default="1")
    shop_add.add_argument("--unit", type=str, default="шт")
    shop_add.add_argument("--category", type=str, default="other", choices=CATEGORIES)
    shop_toggle = shop_sub.add_parser("toggle")
    shop_toggle.add_argument("id", type=str)
    shop_delete = shop_sub.add_parser("delete")
    shop_delete.add_argument("id", type=str)
    shop_sub.add_parser("clear", help="Удалить купленное")
    shop_sub.add_parser("delivery", help="Ссылки на доставку")

    # chat
    chat_parser = sub.add_parser("chat", help="Спросить шеф-повара")
    chat_parser.add_argument("message", type=str, nargs="+")

    # stats / reset
    sub.add_parser("stats", help="Статистика")
    reset_parser = sub.add_parser("reset", help="Удалить все данные")
    reset_parser.add_argument("--yes", action="store_true", help="Без подтверждения")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    load_dotenv()
    config = load_config(args.config)
    assistant = MealMindAssistant(config)

    try:
        match args.command:
            case "scan":
                asyncio.run(_cmd_scan(assistant, args))
            case "inventory":
                _cmd_inventory(assistant, args)
            case "add":
                _cmd_add(assistant, args)
            case "remove":
                assistant.inventory.delete(args.id)
                print("Продукт удалён.")
            case "expiring":
                _cmd_expiring(assistant, config, args)
            case "recipe":
                asyncio.run(_cmd_recipe(assistant, config, args))
            case "saved":
                _print_recipe_list(assistant.recipes.saved(), "Сохранённых рецептов нет.")
            case "unsave":
                assistant.recipes.remove_saved(args.id)
                print("Рецепт удалён из сохранённых.")
            case "history":
                _print_recipe_list(assistant.recipes.history(), "История пуста.")
            case "plan":
                asyncio.run(_cmd_plan(assistant, args))
            case "menu":
                asyncio.run(_cmd_menu(assistant, args))
            case "shopping":
                _cmd_shopping(assistant, config, args)
            case "chat":
                asyncio.run(_cmd_chat(assistant, args))
            case "stats":
                _cmd_stats(assistant)
            case "reset":
                _cmd_reset(assistant, args)
    except MealMindError as e:
        print(f"Ошибка: {e.message}", file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print(f"Ошибка: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        assistant.close()


async def _cmd_scan(assistant: MealMindAssistant, args) -> None:
    print("🔍 Распознаём продукты...")
    if args.dry_run:
        reliable = [
            p for p in await assistant.recognize(args.image)
            if p.confidence is None or p.confidence >= args.min_confidence
        ]
    else:
        reliable = await assistant.scan(args.image, args.min_confidence)

    if args.json:
        print(json.dumps([p.to_dict() for p in reliable], ensure_ascii=False, indent=2))
    elif not reliable:
        print("Продукты не найдены.")
        return
    else:
        print(f"\n🥬 Найдено продуктов: {len(reliable)}")
        for p in reliable:
            bar = "█" * int((p.confidence or 0) * 10)
            print(f"  {p.name:<20} {p.quantity} {p.unit:<6} {bar}  [{CATEGORY_LABELS[p.category]}]")

    if not args.dry_run and reliable:
        print(f"\n✓ Добавлено в холодильник: {len(reliable)}")


def _product_line(product) -> str:
    icon = _STATUS_ICONS[classify(product.expiry_date)]
    return (
        f"  {icon} {product.name:<20} {product.quantity} {product.unit:<6} "
        f"{describe(product.expiry_date):<18} {product.id}"
    )


def _cmd_inventory(assistant: MealMindAssistant, args) -> None:
    products = sort_by_urgency(assistant.inventory.list())

    if args.json:
        print(json.dumps([p.to_dict() for p in products], ensure_ascii=False, indent=2))
        return
    if not products:
        print("Холодильник пуст.")
        return

    counts = count_by_status(products)
    print("  ".join(f"{_STATUS_ICONS[s]} {n}" for s, n in counts.items()))

    if args.group:
        for category, items in group_by_category(products).items():
            print(f"\n{CATEGORY_LABELS[category]}")
            for p in items:
                print(_product_line(p))
    else:
        for p in products:
            print(_product_line(p))


def _cmd_add(assistant: MealMindAssistant, args) -> None:
    product = new_product(
        args.name,
        quantity=args.quantity,
        unit=args.unit,
        category=args.category,
        expiry_date=args.expiry,
    )
    assistant.inventory.add(product)
    print(f"✓ {product.name}: {describe(product.expiry_date)} ({product.id})")


def _cmd_expiring(assistant: MealMindAssistant, config, args) -> None:
    rec = config.recommendation
    days = args.days if args.days is not None else rec.expiring_within_days
    products = assistant.inventory.list()
    expiring = sort_by_urgency(select_expiring(products, days))

    if not expiring:
        print("Нет продуктов с истекающим сроком.")
        return
    print(f"⏰ Скоро испортятся ({len(expiring)}):")
    for p in expiring:
        print(_product_line(p))
    savings = estimate_savings(
        products,
        per_item=rec.savings_per_item,
        within_days=days,
        weigh_by_quantity=rec.weigh_by_quantity,
    )
    print(f"\n💰 Можно сэкономить примерно {savings:.0f} сом")


def _print_recipe(recipe: Recipe) -> None:
    print(f"🍽  {recipe.title}")
    if recipe.description:
        print(f"   {recipe.description}")
    print(
        f"   {format_minutes(recipe.cook_time)} · {recipe.servings} порц. · "
        f"{DIFFICULTY_LABELS.get(recipe.difficulty, recipe.difficulty)}"
    )
    if recipe.uses_expiring_products:
        print(f"   ♻ Использует: {', '.join(recipe.uses_expiring_products)}")

    if recipe.ingredients:
        print("\n   Ингредиенты:")
        for ing in recipe.ingredients:
            mark = "✓" if ing.available else "—"
            print(f"    {mark} {ing.name} {ing.amount} {ing.unit}".rstrip())
    if recipe.instructions:
        print("\n   Приготовление:")
        for i, step in enumerate(recipe.instructions, 1):
            print(f"    {i}. {step}")


def _print_recipe_list(recipes: list[Recipe], empty_message: str) -> None:
    if not recipes:
        print(empty_message)
        return
    for r in recipes:
        print(f"  {truncate(r.title, 30):<30} {format_minutes(r.cook_time):<10} {r.id}")


async def _cmd_recipe(assistant: MealMindAssistant, config, args) -> None:
    constraints = RecipeConstraints(
        servings=args.servings or config.recommendation.default_servings,
        max_time=args.max_time,
        difficulty=args.difficulty,
    )
    print("🍳 Готовим рецепт...")
    recipe = await assistant.generate_recipe(args.select, constraints)

    if args.json:
        print(json.dumps(recipe.to_dict(), ensure_ascii=False, indent=2))
    else:
        print()
        _print_recipe(recipe)

    if args.save:
        assistant.recipes.save(recipe)
        print("\n★ Рецепт сохранён")
    if args.add_missing:
        added = assistant.add_missing_to_shopping(recipe)
        if added:
            print(f"\n🛒 Добавлено в список покупок: {len(added)}")
        else:
            print("\n✓ Все ингредиенты есть")


async def _cmd_plan(assistant: MealMindAssistant, args) -> None:
    def progress(day, slot) -> None:
        print(f"  ✓ {day.name}, {slot.label}: {slot.recipe.title}")

    print("📅 Составляем план на неделю...")
    plan = await assistant.plan_week(on_progress=progress)
    print()
    print(plan.display())

    if args.add_missing:
        added = assistant.add_plan_missing_to_shopping(plan)
        print(f"\n🛒 Добавлено в список покупок: {len(added)}")


async def _cmd_menu(assistant: MealMindAssistant, args) -> None:
    print("🎉 Составляем меню...")
    menu = await assistant.generate_guest_menu(args.guests, args.budget, args.city)

    if args.json:
        print(json.dumps(menu.to_dict(), ensure_ascii=False, indent=2))
    else:
        courses = [
            ("Закуски", menu.appetizers),
            ("Основные блюда", menu.mains),
            ("Десерты", menu.desserts),
        ]
        for label, dishes in courses:
            if dishes:
                print(f"\n{label}:")
                for dish in dishes:
                    print(f"  • {dish.title} ({format_minutes(dish.cook_time)})")
        if menu.beverages:
            print("\nНапитки:")
            for b in menu.beverages:
                print(f"  • {b.name} {b.quantity}".rstrip())
        print(
            f"\n💰 Итого: {menu.total_cost:.0f} сом "
            f"({menu.per_person_cost:.0f} сом на человека)"
        )

    if args.add_to_list:
        assistant.import_guest_shopping(menu)
        print(f"\n🛒 Добавлено в список покупок: {len(menu.shopping_list)}")


def _cmd_shopping(assistant: MealMindAssistant, config, args) -> None:
    shopping = assistant.shopping
    match args.action:
        case "add":
            item = new_shopping_item(
                args.name, quantity=args.quantity, unit=args.unit, category=args.category
            )
            items = shopping.add(item)
        case "toggle":
            items = shopping.toggle(args.id)
        case "delete":
            items = shopping.delete(args.id)
        case "clear":
            items = shopping.clear_checked()
        case "delivery":
            names = [i.name for i in shopping.list() if not i.checked]
            if not names:
                print("Список покупок пуст.")
                return
            links = delivery_links(names)
            preferred = config.profile.delivery_service
            for service in sorted(links, key=lambda s: s != preferred):
                url = links[service]
                print(f"  {service}: {url}")
            return
        case _:
            items = shopping.list()

    if not items:
        print("Список покупок пуст.")
        return
    for item in items:
        mark = "[x]" if item.checked else "[ ]"
        origin = f" ({item.from_recipe})" if item.from_recipe else ""
        print(f"  {mark} {item.name} {item.quantity} {item.unit}{origin}  {item.id}")


async def _cmd_chat(assistant: MealMindAssistant, args) -> None:
    reply = await assistant.chat(" ".join(args.message))
    print(reply)


def _cmd_stats(assistant: MealMindAssistant) -> None:
    stats = assistant.stats.get()
    print("📊 Статистика")
    print(f"  Сэкономлено:          {stats.money_saved:.0f} сом")
    print(f"  Сэкономлено времени:  {format_minutes(int(stats.time_saved))}")
    print(f"  Предотвращено отходов: {stats.waste_prevented:.1f} кг")
    print(f"  Рецептов создано:     {stats.recipes_generated}")
    print(f"  Продуктов отсканировано: {stats.products_scanned}")


def _cmd_reset(assistant: MealMindAssistant, args) -> None:
    if not args.yes:
        answer = input("Удалить все данные? [y/N] ")
        if answer.strip().lower() not in ("y", "yes", "д", "да"):
            print("Отменено.")
            return
    assistant.clear_all_data()
    print("Все данные удалены.")

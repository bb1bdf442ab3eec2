"""
Configuration and data loading/saving for SplitGroups
"""
from __future__ import annotations
import json
import logging
import os
from typing import List, Optional, Tuple

from models import ExpenseGroup, Item, Person, Settings
from utils import app_dir
from validation import GroupValidationError, ensure_valid_group

logger = logging.getLogger(__name__)

EXPORT_VERSION = "1.0.0"
THEMES = ("system", "dark", "light")


class ImportDataError(ValueError):
    """Raised when an export payload cannot be read back"""


def groups_path() -> str:
    return os.path.join(app_dir(), "expense-groups.json")


def settings_path() -> str:
    return os.path.join(app_dir(), "settings.json")


def item_to_dict(item: Item) -> dict:
    return {
        "id": item.id,
        "name": item.name,
        "amount": item.amount,
        "price": item.price,
        "type": item.type,
        "appliesToEveryone": item.applies_to_everyone,
        "selectedPeople": list(item.selected_people),
    }


def dict_to_item(d: dict) -> Item:
    return Item(
        id=d["id"],
        name=d.get("name", ""),
        amount=float(d["amount"]),
        price=float(d["price"]),
        type=d.get("type", "expense"),
        applies_to_everyone=bool(d.get("appliesToEveryone", True)),
        selected_people=list(d.get("selectedPeople", [])),
    )


def group_to_dict(group: ExpenseGroup) -> dict:
    """Convert ExpenseGroup to a dictionary with the web app's key names"""
    d = {
        "id": group.id,
        "name": group.name,
        "people": [{"id": p.id, "name": p.name} for p in group.people],
        "items": [item_to_dict(i) for i in group.items],
    }
    if group.tip_percentage is not None:
        d["tipPercentage"] = group.tip_percentage
    if group.payment_groups:
        d["paymentGroups"] = [list(g) for g in group.payment_groups]
    return d


def dict_to_group(d: dict) -> ExpenseGroup:
    """Convert dictionary from JSON to ExpenseGroup object"""
    tip = d.get("tipPercentage")
    return ExpenseGroup(
        id=d["id"],
        name=d.get("name", ""),
        people=[Person(id=p["id"], name=p.get("name", "")) for p in d.get("people", [])],
        items=[dict_to_item(i) for i in d.get("items", [])],
        tip_percentage=float(tip) if tip is not None else None,
        payment_groups=[list(g) for g in d.get("paymentGroups") or []] or None,
    )


def settings_to_dict(settings: Settings) -> dict:
    d = {"currency": settings.currency, "theme": settings.theme}
    if settings.language is not None:
        d["language"] = settings.language
    return d


def dict_to_settings(d: dict) -> Settings:
    """Settings from JSON; keys this app does not use (such as pixKey) are ignored"""
    theme = d.get("theme", "system")
    if theme not in THEMES:
        logger.warning("Unknown theme %r, using 'system'", theme)
        theme = "system"
    return Settings(
        currency=d.get("currency", "BRL"),
        language=d.get("language"),
        theme=theme,
    )


def load_groups(path: Optional[str] = None) -> List[ExpenseGroup]:
    """Load groups list from JSON file"""
    path = path or groups_path()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.info("No groups file at %s, starting empty", path)
        return []
    if isinstance(data, dict):
        data = data.get("groups", [])
    groups = [dict_to_group(g) for g in data]
    logger.debug("Loaded %d groups from %s", len(groups), path)
    return groups


def save_groups(groups: List[ExpenseGroup], path: Optional[str] = None) -> None:
    path = path or groups_path()
    with open(path, "w", encoding="utf-8") as f:
        json.dump([group_to_dict(g) for g in groups], f, ensure_ascii=False, indent=2)
    logger.debug("Saved %d groups to %s", len(groups), path)


def load_settings(path: Optional[str] = None) -> Settings:
    """Load settings from JSON file, falling back to defaults"""
    path = path or settings_path()
    try:
        with open(path, "r", encoding="utf-8") as f:
            return dict_to_settings(json.load(f))
    except FileNotFoundError:
        return Settings()


def save_settings(settings: Settings, path: Optional[str] = None) -> None:
    path = path or settings_path()
    with open(path, "w", encoding="utf-8") as f:
        json.dump(settings_to_dict(settings), f, ensure_ascii=False, indent=2)


def export_data(groups: List[ExpenseGroup], settings: Settings) -> str:
    """Serialize groups and settings for sharing"""
    payload = {
        "groups": [group_to_dict(g) for g in groups],
        "settings": settings_to_dict(settings),
        "version": EXPORT_VERSION,
    }
    return json.dumps(payload, ensure_ascii=False)


def import_data(text: str) -> Tuple[List[ExpenseGroup], Settings]:
    """
    Parse an export payload. Every group is validated; anything that
    cannot be read back raises ImportDataError.
    """
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise ImportDataError(f"Import data is not valid JSON: {e}") from e
    if not isinstance(payload, dict):
        raise ImportDataError("Import data must be a JSON object")
    if payload.get("version") != EXPORT_VERSION:
        raise ImportDataError(f"Unsupported export version {payload.get('version')!r}")

    raw_groups = payload.get("groups", [])
    raw_settings = payload.get("settings", {})
    if not isinstance(raw_groups, list) or not all(isinstance(g, dict) for g in raw_groups):
        raise ImportDataError("Import data groups must be a list of objects")
    if not isinstance(raw_settings, dict):
        raise ImportDataError("Import data settings must be an object")

    try:
        groups = [dict_to_group(g) for g in raw_groups]
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise ImportDataError(f"Malformed group data: {e}") from e
    for g in groups:
        try:
            ensure_valid_group(g)
        except GroupValidationError as e:
            raise ImportDataError(f"Group {g.name or g.id} is invalid: {e}") from e

    settings = dict_to_settings(raw_settings)
    logger.info("Imported %d groups", len(groups))
    return groups, settings

"""Gear aggregation: one gear item is a base row plus a category detail row.

The two rows live in different collections and the store offers no
transaction across them, so every write is two independent calls. Reads join
them back into a `GearView`; a missing detail row becomes `DetailsStub`.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Iterable

from pydantic import ValidationError

from skateroom.db.store import Row, StoreError, TableStore
from skateroom.schemas.gear import (
    CATEGORY_LABELS,
    DETAIL_COLLECTIONS,
    DETAIL_SCHEMAS,
    CategoryBucket,
    DetailsStub,
    GearCategory,
    GearCreate,
    GearDetails,
    GearUpdate,
    GearView,
    GearWriteResult,
    parse_gear_details,
)


logger = logging.getLogger(__name__)

SKATE_GEAR = "skate_gear"


class GearNotFoundError(LookupError):
    pass


class GearValidationError(ValueError):
    def __init__(self, category: GearCategory, errors: list[dict[str, Any]]) -> None:
        super().__init__(f"invalid {category.value} details")
        self.category = category
        self.errors = errors


def _validated_details(category: GearCategory, data: dict[str, Any] | None) -> GearDetails:
    try:
        return parse_gear_details(category, data)
    except ValidationError as exc:
        errors = exc.errors(include_url=False, include_context=False, include_input=False)
        raise GearValidationError(category, errors) from exc


def _detail_row(details: GearDetails) -> Row:
    # Enums are stored by value; dates stay as date objects for the store.
    row = details.model_dump(mode="python")
    for key, value in row.items():
        if isinstance(value, Enum):
            row[key] = value.value
    return row


def empty_buckets() -> list[CategoryBucket]:
    return [CategoryBucket(name=label, category=category) for category, label in CATEGORY_LABELS.items()]


def _fetch_details(store: TableStore, category: GearCategory, gear_id: str) -> GearDetails | DetailsStub:
    try:
        row = store.maybe_single(DETAIL_COLLECTIONS[category], {"gear_id": gear_id})
    except StoreError:
        logger.warning("gear.detail_fetch_failed gear_id=%s category=%s", gear_id, category.value, exc_info=True)
        return DetailsStub()
    if row is None:
        return DetailsStub()
    try:
        return DETAIL_SCHEMAS[category].model_validate(row)
    except ValidationError:
        logger.warning("gear.detail_row_invalid gear_id=%s category=%s", gear_id, category.value, exc_info=True)
        return DetailsStub()


def build_gear_view(row: Row, details: GearDetails | DetailsStub) -> GearView:
    return GearView(
        id=row["id"],
        user_id=row["user_id"],
        category=row["category"],
        name=row["name"],
        brand=row.get("brand"),
        specs=row.get("specs"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
        details=details,
    )


def fetch_all_gear(store: TableStore, user_id: str) -> list[CategoryBucket]:
    """All of a user's gear, grouped into the six fixed category buckets."""

    buckets = empty_buckets()
    by_category = {bucket.category: bucket for bucket in buckets}

    for row in store.select(SKATE_GEAR, {"user_id": user_id}, order_by="created_at"):
        try:
            category = GearCategory(row.get("category"))
        except ValueError:
            logger.warning("gear.unknown_category gear_id=%s category=%r", row.get("id"), row.get("category"))
            continue
        details = _fetch_details(store, category, row["id"])
        by_category[category].items.append(build_gear_view(row, details))

    return buckets


def filter_gear(buckets: Iterable[CategoryBucket], query: str | None) -> list[CategoryBucket]:
    needle = (query or "").strip().lower()
    if not needle:
        return list(buckets)
    filtered: list[CategoryBucket] = []
    for bucket in buckets:
        items = [
            item
            for item in bucket.items
            if any(needle in (text or "").lower() for text in (item.name, item.brand, item.specs))
        ]
        filtered.append(CategoryBucket(name=bucket.name, category=bucket.category, items=items))
    return filtered


def _get_owned_gear(store: TableStore, user_id: str, gear_id: str) -> Row:
    row = store.maybe_single(SKATE_GEAR, {"id": gear_id, "user_id": user_id})
    if row is None:
        raise GearNotFoundError(gear_id)
    return row


def create_gear(store: TableStore, user_id: str, payload: GearCreate) -> GearWriteResult:
    """Insert the base row, then its detail row.

    A failed base insert propagates and nothing else is written. A failed
    detail insert leaves the base row in place; it reads back with the stub.
    """

    details = _validated_details(payload.category, payload.details)
    warnings: list[str] = []

    inserted = store.insert(
        SKATE_GEAR,
        [
            {
                "user_id": user_id,
                "category": payload.category.value,
                "name": payload.name,
                "brand": payload.brand,
                "specs": payload.specs,
            }
        ],
    )
    gear_id = inserted[0]["id"]
    logger.info("gear.created gear_id=%s category=%s", gear_id, payload.category.value)

    detail_row = _detail_row(details)
    detail_row["gear_id"] = gear_id
    try:
        store.insert(DETAIL_COLLECTIONS[payload.category], [detail_row])
    except StoreError as exc:
        logger.warning("gear.detail_insert_failed gear_id=%s: %s", gear_id, exc)
        warnings.append(f"Gear saved without details: {exc.message}")

    return GearWriteResult(categories=fetch_all_gear(store, user_id), warnings=warnings)


def update_gear(store: TableStore, user_id: str, gear_id: str, payload: GearUpdate) -> GearWriteResult:
    """Update base and detail rows independently; the category never changes."""

    existing = _get_owned_gear(store, user_id, gear_id)
    category = GearCategory(existing["category"])
    details = _validated_details(category, payload.details) if payload.details is not None else None
    warnings: list[str] = []

    base_patch = payload.model_dump(include={"name", "brand", "specs"}, exclude_unset=True)
    if base_patch:
        try:
            store.update(SKATE_GEAR, base_patch, {"id": gear_id, "user_id": user_id})
        except StoreError as exc:
            logger.warning("gear.base_update_failed gear_id=%s: %s", gear_id, exc)
            warnings.append(f"Gear not updated: {exc.message}")

    if details is not None:
        collection = DETAIL_COLLECTIONS[category]
        detail_row = _detail_row(details)
        try:
            updated = store.update(collection, detail_row, {"gear_id": gear_id})
            if not updated:
                # Base row left without details by an earlier failed create.
                store.insert(collection, [{**detail_row, "gear_id": gear_id}])
        except StoreError as exc:
            logger.warning("gear.detail_update_failed gear_id=%s: %s", gear_id, exc)
            warnings.append(f"Gear details not updated: {exc.message}")

    logger.info("gear.updated gear_id=%s warnings=%d", gear_id, len(warnings))
    return GearWriteResult(categories=fetch_all_gear(store, user_id), warnings=warnings)


def delete_gear(store: TableStore, user_id: str, gear_id: str) -> GearWriteResult:
    """Delete the detail row, then the base row."""

    existing = _get_owned_gear(store, user_id, gear_id)
    category = GearCategory(existing["category"])
    warnings: list[str] = []

    try:
        store.delete(DETAIL_COLLECTIONS[category], {"gear_id": gear_id})
    except StoreError as exc:
        logger.warning("gear.detail_delete_failed gear_id=%s: %s", gear_id, exc)
        warnings.append(f"Gear details not deleted: {exc.message}")

    store.delete(SKATE_GEAR, {"id": gear_id, "user_id": user_id})
    logger.info("gear.deleted gear_id=%s", gear_id)
    return GearWriteResult(categories=fetch_all_gear(store, user_id), warnings=warnings)

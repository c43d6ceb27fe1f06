"""Human-facing labels for domain enums."""

from enum import Enum
from typing import TypeVar

from vsg_marketplace.domain.items import Category
from vsg_marketplace.domain.orders import OrderStatus

E = TypeVar("E", bound=Enum)

ORDER_STATUS_LABELS: dict[OrderStatus, str] = {
    OrderStatus.PENDING: "Pending",
    OrderStatus.FINISHED: "Finished",
    OrderStatus.DECLINED: "Declined",
}

CATEGORY_LABELS: dict[Category, str] = {
    Category.LAPTOPS: "Laptops",
    Category.FURNITURE: "Furniture",
    Category.MULTIMEDIA: "Multimedia",
    Category.OTHERS: "Others",
}

_LABELS: dict[type[Enum], dict] = {
    OrderStatus: ORDER_STATUS_LABELS,
    Category: CATEGORY_LABELS,
}


def missing_labels() -> dict[type[Enum], set[Enum]]:
    """Return enum members that have no display label."""
    missing: dict[type[Enum], set[Enum]] = {}
    for enum_type, table in _LABELS.items():
        absent = set(enum_type) - set(table)
        if absent:
            missing[enum_type] = absent
    return missing


if missing_labels():
    raise RuntimeError(f"Display labels are incomplete: {missing_labels()}")


def display_name(value: Enum) -> str:
    """Return the display label for an enum member."""
    return _LABELS[type(value)][value]


def from_display_name(enum_type: type[E], label: str) -> E:
    """Return the enum member whose display label matches."""
    for member, member_label in _LABELS[enum_type].items():
        if member_label == label:
            return member
    raise ValueError(f"No {enum_type.__name__} with display name {label!r}")

"""
BrowserStack product categories.

The set is closed and fixed at build time; it is used both as the tool
registry key and as the intent classifier's output vocabulary.
"""

from typing import Literal, Tuple

ProductName = Literal[
    "automate",
    "app-automate",
    "live",
    "app-live",
    "accessibility",
    "test-management",
    "sdk",
    "self-heal",
]

AUTOMATE = "automate"
APP_AUTOMATE = "app-automate"
LIVE = "live"
APP_LIVE = "app-live"
ACCESSIBILITY = "accessibility"
TEST_MANAGEMENT = "test-management"
SDK = "sdk"
SELF_HEAL = "self-heal"

PRODUCT_NAMES: Tuple[str, ...] = (
    AUTOMATE,
    APP_AUTOMATE,
    LIVE,
    APP_LIVE,
    ACCESSIBILITY,
    TEST_MANAGEMENT,
    SDK,
    SELF_HEAL,
)


def is_product_name(value: str) -> bool:
    return value in PRODUCT_NAMES

"""
Keyword-based intent classifier.

Maps a user query to the set of BrowserStack products it is about. Each rule
pairs a product with an inclusion predicate and an optional exclusion
predicate; a rule fires when the inclusion matches and the exclusion does
not. Rules are evaluated independently, so one query may yield several
products, or none at all.

All matching is done on a lower-cased copy of the query using plain
substring checks.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Set, Tuple

from .products import (
    ACCESSIBILITY,
    APP_AUTOMATE,
    APP_LIVE,
    AUTOMATE,
    LIVE,
    SDK,
    SELF_HEAL,
    TEST_MANAGEMENT,
)

Predicate = Callable[[str], bool]


def contains_any(*keywords: str) -> Predicate:
    """Predicate matching when any keyword occurs in the lowered query."""
    def predicate(text: str) -> bool:
        return any(keyword in text for keyword in keywords)
    return predicate


def contains_without(keyword: str, excluded: str) -> Predicate:
    """Predicate matching `keyword` only when `excluded` is absent."""
    def predicate(text: str) -> bool:
        return keyword in text and excluded not in text
    return predicate


def either(*predicates: Predicate) -> Predicate:
    def predicate(text: str) -> bool:
        return any(p(text) for p in predicates)
    return predicate


@dataclass(frozen=True)
class IntentRule:
    """A single classification rule for one product."""
    category: str
    include: Predicate
    exclude: Optional[Predicate] = None

    def matches(self, lowered_query: str) -> bool:
        """Evaluate the rule against an already lower-cased query."""
        if not self.include(lowered_query):
            return False
        return self.exclude is None or not self.exclude(lowered_query)


# Mobile variants win over their web counterparts: a query that triggers
# app-automate (or app-live) never also triggers automate (or live).
APP_AUTOMATE_KEYWORDS = contains_any("app test", "app automate", "mobile app", "appium")
APP_LIVE_KEYWORDS = contains_any("app live", "mobile live")

INTENT_RULES: Tuple[IntentRule, ...] = (
    IntentRule(
        AUTOMATE,
        include=contains_any("test", "automate", "build", "session", "screenshot"),
        exclude=APP_AUTOMATE_KEYWORDS,
    ),
    IntentRule(APP_AUTOMATE, include=APP_AUTOMATE_KEYWORDS),
    IntentRule(
        LIVE,
        include=either(
            contains_any("live", "interactive"),
            contains_without("browser", "browserstack sdk"),
        ),
        exclude=APP_LIVE_KEYWORDS,
    ),
    IntentRule(APP_LIVE, include=APP_LIVE_KEYWORDS),
    IntentRule(
        ACCESSIBILITY,
        include=contains_any("accessibility", "a11y"),
    ),
    IntentRule(
        TEST_MANAGEMENT,
        include=contains_any("test management", "test case", "test run", "testrail"),
    ),
    IntentRule(
        SDK,
        include=contains_any("sdk", "browserstack sdk"),
    ),
    IntentRule(
        SELF_HEAL,
        include=contains_any("self heal", "selfheal", "flaky"),
    ),
)


def classify(query: str, rules: Iterable[IntentRule] = INTENT_RULES) -> Set[str]:
    """
    Detect the products a query refers to.

    Args:
        query: Raw user query text
        rules: Rule table to evaluate (defaults to INTENT_RULES)

    Returns:
        Set of product names; empty when nothing matched
    """
    lowered = query.lower()
    return {rule.category for rule in rules if rule.matches(lowered)}


def order_intents(intents: Iterable[str], rules: Iterable[IntentRule] = INTENT_RULES) -> List[str]:
    """Order a detected intent set by rule table position."""
    intents = set(intents)
    ordered = [rule.category for rule in rules if rule.category in intents]
    # Categories outside the rule table keep a stable, sorted position at the end
    ordered.extend(sorted(intents - set(ordered)))
    return ordered

"""
Status counter classification.

This module decides whether a server status counter counts as a read, a
write, both or neither. Classification is a pure function of the counter
name and the rule set; every category is evaluated independently, so a
counter for "insert ... select" statements is both a read and a write.
"""

import logging
import re
from typing import Iterable, List, Optional, Sequence

from ..models.config import CounterRule
from ..models.sample import CounterCategory

logger = logging.getLogger(__name__)

WRITE_MARKERS = (
    "_alter_",
    "_create_",
    "_delete",
    "_drop_",
    "_insert",
    "_load",
    "_rename",
    "_replace",
    "_truncate",
    "_update",
)

READ_MARKERS = ("_select",)

DEFAULT_RULES: List[CounterRule] = [
    CounterRule(
        category="write",
        match_type="contains",
        patterns=list(WRITE_MARKERS),
        comment="Data and schema modifying statements",
    ),
    CounterRule(
        category="read",
        match_type="contains",
        patterns=list(READ_MARKERS),
        comment="SELECT statements, including INSERT ... SELECT",
    ),
]

_CATEGORY_FLAGS = {
    "read": CounterCategory.READ,
    "write": CounterCategory.WRITE,
}


def _rule_matches(rule: CounterRule, name: str) -> bool:
    if rule.match_type == "contains":
        return any(pattern in name for pattern in rule.patterns)
    if rule.match_type == "regex":
        compiled = rule.compiled or [re.compile(p) for p in rule.patterns]
        return any(regex.search(name) for regex in compiled)
    raise ValueError(f"Unsupported match_type '{rule.match_type}'")


def classify_counter(
    name: str, rules: Optional[Sequence[CounterRule]] = None
) -> CounterCategory:
    """Classify a status counter name.

    Every rule is checked; the categories of all matching rules are combined,
    so the result can be READ, WRITE, BOTH or NONE.

    Args:
        name: Status variable name, e.g. 'Com_insert_select'.
        rules: Rules to apply. Defaults to DEFAULT_RULES.

    Returns:
        The combined CounterCategory flags.

    Examples:
        >>> classify_counter('Com_select')
        <CounterCategory.READ: 1>
        >>> classify_counter('Com_insert_select') == CounterCategory.BOTH
        True
        >>> classify_counter('Com_show_status')
        <CounterCategory.NONE: 0>
    """
    category = CounterCategory.NONE
    for rule in DEFAULT_RULES if rules is None else rules:
        if _rule_matches(rule, name):
            category |= _CATEGORY_FLAGS[rule.category]
    return category


class CounterClassifier:
    """
    Callable classifier bound to a fixed rule set.

    An empty or missing rule list falls back to DEFAULT_RULES.
    """

    def __init__(self, rules: Optional[Iterable[CounterRule]] = None):
        self.rules: List[CounterRule] = list(rules) if rules else list(DEFAULT_RULES)
        logger.debug(f"CounterClassifier initialized with {len(self.rules)} rules")

    def classify(self, name: str) -> CounterCategory:
        return classify_counter(name, self.rules)

    __call__ = classify

"""Resolve the effective style for a stack of open labels."""

from collections.abc import Sequence

from kahva.formatter.style import Rule, Style


def match_specificity(pattern: Sequence[str], labels: Sequence[str]) -> list[int] | None:
    """
    Match pattern as a subsequence of labels.

    Returns the matched label indices in reverse order, or None if the pattern
    does not match. Each required label takes the earliest unused position.
    """
    remaining = iter(enumerate(labels))
    matched: list[int] = []
    for required in pattern:
        for index, label in remaining:
            if label == required:
                matched.append(index)
                break
    if len(matched) != len(pattern):
        return None
    matched.reverse()
    return matched


class StyleMatcher:
    """
    Resolves label stacks against a rule table, caching one Style per stack.

    Matching rules are ranked by their reversed matched indices, compared as
    lists. For labels "a b c d", rule "a d" ranks [3, 0], which beats both
    "d" ([3]) and "a b c" ([2, 1, 0]). Styles are merged from the lowest rank
    up, so higher ranked rules win attribute by attribute.
    """

    def __init__(self, rules: Sequence[Rule]) -> None:
        self.rules = list(rules)
        self.cache: dict[tuple[str, ...], Style] = {}

    def resolve(self, labels: Sequence[str]) -> Style:
        """Return the effective style for the given label stack."""
        key = tuple(labels)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        ranked: list[tuple[list[int], Style]] = []
        for rule in self.rules:
            specificity = match_specificity(rule.pattern, key)
            if specificity is not None:
                ranked.append((specificity, rule.style))
        ranked.sort(key=lambda entry: entry[0])

        style = Style()
        for _, rule_style in ranked:
            style = style.merge(rule_style)

        self.cache[key] = style
        return style

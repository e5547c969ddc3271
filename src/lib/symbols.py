"""
Symbol pattern builder

Builds the single regular expression that recognizes code-like tokens in
documentation prose, so the Markdown converter can wrap them as inline
code.

Recognized tokens:
- language keywords (`interface`, `struct` by default)
- qualified names: `http.Client`, `http.Client.Do`,
  `github.com/motemen/goreadme.DefaultTemplate`
- pointer-receiver method references: `(*Client).Do`, `(*http.Client).Do`
- exported names of the documented package, taken verbatim

Any of these may be directly followed by one bracket group, e.g.
`New(opts)`, `interface{}`, `Values["key"]`.

Example:
    >>> matcher = symbolMatcher_build(["NewClient"])
    >>> matcher.wrap("Call NewClient(ctx) or use http.Client.")
    'Call `NewClient(ctx)` or use `http.Client`.'
"""

import re
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Pattern, Tuple

from .errors import PatternConstructionFailure
from .log import LOG


QUALIFIED_NAME = r"(?:[a-z0-9.:\-]+/)*[a-z][a-z0-9_]*\.[A-Z]\w*(?:\.[A-Z]\w*)?"
POINTER_METHOD = r"\(\*(?:[a-z][a-z0-9_]*\.)?[A-Z]\w*\)\.[A-Z]\w*"

# One bracket group, nesting one level deep
BRACKET_GROUP = (
    r"(?:\((?:[^()\n]|\([^()\n]*\))*\)"
    r"|\[(?:[^\[\]\n]|\[[^\[\]\n]*\])*\]"
    r"|\{(?:[^{}\n]|\{[^{}\n]*\})*\})?"
)

LEADING_BOUNDARY = r"(?:^|(?<=\s)|\b)"
TRAILING_BOUNDARY = r"(?=[^\w`]|$)"


@dataclass(frozen=True)
class SymbolMatcher:
    """
    Immutable matcher for code-like tokens in prose

    Built once per rendering run by symbolMatcher_build() and shared
    read-only by everything that renders prose in that run.

    Attributes:
        pattern: Compiled pattern; group 0 is exactly the text to wrap
        names: Exported names the pattern was built from, in pattern order
    """
    pattern: Pattern[str]
    names: Tuple[str, ...]

    def finditer(self, text: str) -> Iterator["re.Match[str]"]:
        return self.pattern.finditer(text)

    def wrap(self, text: str) -> str:
        """Wrap every match in backticks, leaving boundary characters outside"""
        return self.pattern.sub(lambda match: f"`{match.group(0)}`", text)


def names_order(names: Iterable[str]) -> List[str]:
    """
    Order exported names for alternation: longest first, ties kept in
    declaration order, duplicates and empty names dropped.
    """
    unique: List[str] = []
    for name in names:
        if name and name not in unique:
            unique.append(name)
    return sorted(unique, key=len, reverse=True)


def symbolMatcher_build(
    exported_names: Iterable[str], keywords: Optional[Iterable[str]] = None
) -> SymbolMatcher:
    """
    Build the symbol matcher for one rendering run

    Args:
        exported_names: Exported identifiers of the documented package
        keywords: Literal keywords to match; defaults to the configured
                  code_keywords

    Returns:
        SymbolMatcher ready to be applied to paragraph text

    Raises:
        PatternConstructionFailure: If the assembled pattern does not compile
    """
    if keywords is None:
        from ..config import appsettings
        keywords = appsettings.code_keywords

    names = names_order(exported_names)
    alternatives = [POINTER_METHOD, QUALIFIED_NAME]
    alternatives += [re.escape(name) for name in names]
    alternatives += [re.escape(keyword) for keyword in names_order(keywords)]

    source = (
        LEADING_BOUNDARY
        + "(?:" + "|".join(alternatives) + ")"
        + BRACKET_GROUP
        + TRAILING_BOUNDARY
    )

    try:
        pattern = re.compile(source)
    except re.error as e:
        raise PatternConstructionFailure(f"Invalid symbol pattern: {e}") from e

    LOG(f"Symbol pattern built from {len(names)} exported names", level=3)
    return SymbolMatcher(pattern=pattern, names=tuple(names))

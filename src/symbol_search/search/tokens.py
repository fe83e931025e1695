"""Token normalization shared by the query side and the corpus side.

The symbol text index treats underscores as word separators, the same way it
treats slashes. Query fragments therefore swap underscores for hyphens before
they are used as match tokens: a search for ``A`` must not treat ``A_B`` as a
prefix hit, and a search for ``A_B`` must stay distinguishable from ``A B``.

Only match tokens are normalized. Values used for exact equality, such as the
package head of ``json.Marshal``, are passed through untouched.
"""

from __future__ import annotations


TEXT_SEARCH_CONFIGURATION = "symbols"


def normalize(raw: str) -> str:
    """Return ``raw`` with every underscore replaced by a hyphen."""
    return raw.replace("_", "-")


def to_lexeme(fragment: str) -> str:
    """Fold a match token the way the case-insensitive text index does."""
    return normalize(fragment).lower()


def split_words(raw: str) -> list[str]:
    """Split on runs of whitespace, dropping empty fragments."""
    return raw.split()


def split_first_dot(raw: str) -> tuple[str, str]:
    """Split ``raw`` at its first dot.

    ``pkg.Type.Method`` yields ``("pkg", "Type.Method")``. Input without a dot
    yields ``(raw, "")``.
    """
    head, _, rest = raw.partition(".")
    return head, rest

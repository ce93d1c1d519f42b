"""Resolves Shopify product titles to WebStock article numbers.

WebStock uses the EAN as article number, so a mapped title yields the same code
for both fields.
"""

from dataclasses import dataclass
from typing import Dict, Mapping

from .models import LineItem

UNKNOWN_ARTICLE = "UNKNOWN"


def normalize_title(title) -> str:
    if not title:
        return ""
    return str(title).strip().lower()


@dataclass(frozen=True)
class ResolvedArticle:
    article_number: str
    ean: str


class ArticleResolver:
    """Static title → EAN lookup with SKU / title fallback."""

    def __init__(self, mapping: Mapping[str, str]):
        # Keys are normalized once so the configured table may use any casing.
        self._mapping: Dict[str, str] = {
            normalize_title(title): str(code) for title, code in mapping.items()
        }

    def resolve(self, item: LineItem) -> ResolvedArticle:
        """
        Looks up the article for a line item.

        Falls back to the SKU, then the raw title, then "UNKNOWN"; the EAN is
        empty on every fallback path.
        """
        ean = self._mapping.get(normalize_title(item.title))
        if ean:
            return ResolvedArticle(article_number=ean, ean=ean)

        return ResolvedArticle(
            article_number=item.sku or item.title or UNKNOWN_ARTICLE,
            ean="",
        )

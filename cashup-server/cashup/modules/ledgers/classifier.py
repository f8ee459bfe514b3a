"""Credit-sale detection from free-text sale memos.

Cashiers mark sales taken on credit by typing a word into the order note,
either "credit" or the Somali "deyn". Those sales bring in no money on the
day they are rung up, so they are left out of cash-in.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional, Protocol

DEFAULT_CREDIT_TOKENS: tuple[str, ...] = ("credit", "deyn")


class CreditSaleClassifier(Protocol):
    def __call__(self, memo: Optional[str]) -> bool:
        ...


class KeywordCreditClassifier:
    """Treat a sale as credit when its trimmed, lower-cased memo contains a token."""

    def __init__(self, tokens: Iterable[str] = DEFAULT_CREDIT_TOKENS) -> None:
        self.tokens = tuple(token.strip().lower() for token in tokens if token and token.strip())
        if not self.tokens:
            raise ValueError("KeywordCreditClassifier needs at least one token")

    def __call__(self, memo: Optional[str]) -> bool:
        text = (memo or "").strip().lower()
        if not text:
            return False
        return any(text == token or token in text for token in self.tokens)

    def __repr__(self) -> str:
        return f"KeywordCreditClassifier(tokens={self.tokens!r})"


_default_classifier = KeywordCreditClassifier()


def is_credit_sale(memo: Optional[str]) -> bool:
    return _default_classifier(memo)


__all__ = [
    "DEFAULT_CREDIT_TOKENS",
    "CreditSaleClassifier",
    "KeywordCreditClassifier",
    "is_credit_sale",
]

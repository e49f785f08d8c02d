import math
from typing import Any, Callable, Iterable

from exceptions.exceptions import ErrorInvalidOrMissingGenre, ErrorInvalidDiscountPercent
from models.book import Book, BookFilter

BookPredicate = Callable[[Book], bool]


def _fold(value: str) -> str:
    return value.casefold()


def build_book_filter(criteria: BookFilter | None = None) -> BookPredicate:
    """
    Build a predicate from optional genre/title/author criteria.

    genre matches exactly and title/author match as substrings, all ignoring
    case. Criteria combine with AND; missing or empty ones are skipped.
    """
    checks = []
    if criteria is not None:
        if criteria.genre:
            genre = _fold(criteria.genre)
            checks.append(lambda book: book.genre is not None and _fold(book.genre) == genre)
        if criteria.title:
            title = _fold(criteria.title)
            checks.append(lambda book: title in _fold(book.title))
        if criteria.author:
            author = _fold(criteria.author)
            checks.append(lambda book: author in _fold(book.author))

    def predicate(book: Book) -> bool:
        return all(check(book) for check in checks)

    return predicate


def validate_genre(genre: str | None) -> str:
    trimmed = (genre or "").strip()
    if not trimmed:
        raise ErrorInvalidOrMissingGenre()
    return trimmed


def validate_discount_percent(discount: Any) -> float:
    if discount is None or isinstance(discount, bool):
        raise ErrorInvalidDiscountPercent()
    try:
        value = float(discount)
    except (TypeError, ValueError):
        raise ErrorInvalidDiscountPercent()
    if math.isnan(value) or not 0 <= value <= 100:
        raise ErrorInvalidDiscountPercent()
    return value


def sum_prices(books: Iterable[Book]) -> float:
    # a book without a price counts as free
    return sum(book.price or 0 for book in books)


def apply_discount(total: float, discount_percent: float) -> float:
    return total * (1 - discount_percent / 100)

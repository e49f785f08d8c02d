from datetime import datetime, timezone
from threading import RLock
from typing import Any, Callable, Dict, List

from exceptions.exceptions import ErrorDuplicateIdentifier
from models.book import Book, BookCreate

IMMUTABLE_FIELDS = ("id", "created_at")


class BookRepository:
    """
    In-memory collection of books keyed by id.

    Dict order is insertion order, so listing never needs sorting. Every record
    handed in or out is a deep copy, callers never share state with the store.
    All access goes through one lock so concurrent requests see whole records.
    """

    def __init__(self) -> None:
        self._books: Dict[int, Book] = {}
        self._lock = RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._books)

    async def count(self) -> int:
        return len(self)

    async def find(self, book_id: int) -> Book | None:
        with self._lock:
            book = self._books.get(book_id)
            return book.model_copy(deep=True) if book is not None else None

    async def insert(self, candidate: BookCreate) -> Book:
        with self._lock:
            if candidate.id in self._books:
                raise ErrorDuplicateIdentifier(candidate.id)
            book = Book(**candidate.model_dump(), created_at=datetime.now(timezone.utc))
            self._books[book.id] = book
            return book.model_copy(deep=True)

    async def update(self, book_id: int, fields: Dict[str, Any]) -> Book | None:
        with self._lock:
            current = self._books.get(book_id)
            if current is None:
                return None
            changes = {
                name: value for name, value in fields.items()
                if name in Book.model_fields and name not in IMMUTABLE_FIELDS
            }
            # id and created_at always come from the stored record
            changes.update(id=current.id, created_at=current.created_at)
            updated = current.model_copy(update=changes, deep=True)
            self._books[book_id] = updated
            return updated.model_copy(deep=True)

    async def remove(self, book_id: int) -> bool:
        with self._lock:
            return self._books.pop(book_id, None) is not None

    async def list_all(self) -> List[Book]:
        with self._lock:
            return [book.model_copy(deep=True) for book in self._books.values()]

    async def list_matching(self, predicate: Callable[[Book], bool]) -> List[Book]:
        with self._lock:
            books = [book.model_copy(deep=True) for book in self._books.values()]
        return [book for book in books if predicate(book)]

    async def reset(self) -> None:
        with self._lock:
            self._books.clear()

from typing import Any, List

from exceptions.exceptions import BaseServiceException, ErrorBookNotFound, ErrorNoBooksForGenre
from models.book import Book, BookFilter, DiscountResult
from repositories.repository_books import BookRepository
from services import query_books, validation_books

from loguru import logger


class BookService:
    def __init__(self, repository: BookRepository):
        self.repository = repository

    async def create_book(self, payload: Any) -> Book:
        try:
            candidate = validation_books.validate_create_payload(payload)
            book = await self.repository.insert(candidate)
        except BaseServiceException as e:
            logger.error(f"Failed create book with details: {payload} ---> Error: {e}")
            raise
        logger.info(f"Book created with details: {book}")
        return book

    async def read_book_by_id(self, raw_id: Any) -> Book:
        book_id = self._parse_id(raw_id)
        book = await self.repository.find(book_id)
        if book is None:
            logger.error(f"Book with id {book_id} not found")
            raise ErrorBookNotFound(book_id)
        logger.info(f"Book with id {book_id} found")
        return book

    async def read_books(self, criteria: BookFilter | None = None) -> List[Book]:
        books = await self.repository.list_matching(query_books.build_book_filter(criteria))
        logger.info(f"Found {len(books)} books for filter {criteria}")
        return books

    async def update_book_by_id(self, raw_id: Any, payload: Any) -> Book:
        book_id = self._parse_id(raw_id)
        if await self.repository.find(book_id) is None:
            logger.error(f"Failed update, book with id {book_id} not found")
            raise ErrorBookNotFound(book_id)
        try:
            fields = validation_books.validate_update_payload(payload)
        except BaseServiceException as e:
            logger.error(f"Failed update book {book_id} with details: {payload} ---> Error: {e}")
            raise
        book = await self.repository.update(book_id, fields)
        if book is None:
            # removed between the existence check and the update
            logger.error(f"Failed update, book with id {book_id} not found")
            raise ErrorBookNotFound(book_id)
        logger.info(f"Book successfully updated with details: {book}")
        return book

    async def delete_book_by_id(self, raw_id: Any) -> None:
        book_id = self._parse_id(raw_id)
        if not await self.repository.remove(book_id):
            logger.error(f"Failed delete, book with id {book_id} not found")
            raise ErrorBookNotFound(book_id)
        logger.info(f"Book with id {book_id} successfully deleted")

    async def delete_all_books(self) -> None:
        count = await self.repository.count()
        await self.repository.reset()
        logger.info(f"All books successfully deleted ({count} removed)")

    async def get_discounted_price(self, genre: str | None, discount: Any) -> DiscountResult:
        try:
            trimmed = query_books.validate_genre(genre)
            discount_percent = query_books.validate_discount_percent(discount)
        except BaseServiceException as e:
            logger.error(f"Invalid discount query genre={genre!r} discount={discount!r} ---> Error: {e}")
            raise
        books = await self.repository.list_matching(query_books.build_book_filter(BookFilter(genre=trimmed)))
        if not books:
            logger.error(f"No books found for genre {trimmed}")
            raise ErrorNoBooksForGenre(trimmed)
        total = query_books.apply_discount(query_books.sum_prices(books), discount_percent)
        logger.info(f"Discounted price for {len(books)} {trimmed} books at {discount_percent}%: {total}")
        return DiscountResult(
            genre=trimmed,
            discount_percentage=discount_percent,
            total_discounted_price=total,
        )

    @staticmethod
    def _parse_id(raw_id: Any) -> int:
        try:
            return validation_books.parse_book_id(raw_id)
        except BaseServiceException:
            logger.error(f"Invalid book id {raw_id!r}")
            raise

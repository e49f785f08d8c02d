from typing import Any, List

from fastapi import APIRouter, Body, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from exceptions.exceptions import BaseServiceException, ErrorKind
from models.book import Book, BookFilter, DiscountResult
from services.service_books import BookService

router = APIRouter(
    prefix="/books",
    tags=["Books"],
)

STATUS_BY_KIND = {
    ErrorKind.INVALID_FIELD: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_IDENTIFIER: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NO_UPDATE_DATA: status.HTTP_400_BAD_REQUEST,
    ErrorKind.IMMUTABLE_FIELD_UPDATE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_OR_MISSING_GENRE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_DISCOUNT_PERCENT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.NO_BOOKS_FOR_GENRE: status.HTTP_404_NOT_FOUND,
    ErrorKind.DUPLICATE_IDENTIFIER: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


async def service_error_handler(request: Request, exc: BaseServiceException) -> JSONResponse:
    return JSONResponse(
        status_code=STATUS_BY_KIND.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR),
        content={"error": exc.detail, "kind": exc.kind.value},
    )


def get_book_service(request: Request) -> BookService:
    return request.app.state.book_service


# must stay above /{book_id}, otherwise "discounted-price" is read as an id
@router.get("/discounted-price")
async def read_discounted_price(
    genre: str | None = None,
    discount: str | None = None,
    service: BookService = Depends(get_book_service),
) -> DiscountResult:
    return await service.get_discounted_price(genre, discount)


@router.get("")
async def read_books(
    genre: str | None = None,
    title: str | None = None,
    author: str | None = None,
    service: BookService = Depends(get_book_service),
) -> List[Book]:
    return await service.read_books(BookFilter(genre=genre, title=title, author=author))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_book(
    payload: Any = Body(default=None),
    service: BookService = Depends(get_book_service),
) -> Book:
    return await service.create_book(payload)


@router.get("/{book_id}")
async def read_book(book_id: str, service: BookService = Depends(get_book_service)) -> Book:
    return await service.read_book_by_id(book_id)


@router.patch("/{book_id}")
async def update_book(
    book_id: str,
    payload: Any = Body(default=None),
    service: BookService = Depends(get_book_service),
) -> Book:
    return await service.update_book_by_id(book_id, payload)


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_book(book_id: str, service: BookService = Depends(get_book_service)):
    await service.delete_book_by_id(book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def delete_all_books(service: BookService = Depends(get_book_service)):
    await service.delete_all_books()
    return Response(status_code=status.HTTP_204_NO_CONTENT)

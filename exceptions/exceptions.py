from enum import Enum


class ErrorKind(str, Enum):
    INVALID_FIELD = "InvalidField"
    INVALID_IDENTIFIER = "InvalidIdentifier"
    NOT_FOUND = "NotFound"
    DUPLICATE_IDENTIFIER = "DuplicateIdentifier"
    NO_UPDATE_DATA = "NoUpdateData"
    IMMUTABLE_FIELD_UPDATE = "ImmutableFieldUpdate"
    INVALID_OR_MISSING_GENRE = "InvalidOrMissingGenre"
    INVALID_DISCOUNT_PERCENT = "InvalidDiscountPercent"
    NO_BOOKS_FOR_GENRE = "NoBooksForGenre"


class BaseServiceException(Exception):
    kind: ErrorKind
    detail = ""

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.detail
        super().__init__(self.detail)


class ErrorInvalidField(BaseServiceException):
    kind = ErrorKind.INVALID_FIELD

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Invalid {field}")


class ErrorInvalidIdentifier(BaseServiceException):
    kind = ErrorKind.INVALID_IDENTIFIER
    detail = "Invalid id"


class ErrorBookNotFound(BaseServiceException):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, book_id: int):
        self.book_id = book_id
        super().__init__(f"Book with id {book_id} not found")


class ErrorDuplicateIdentifier(BaseServiceException):
    kind = ErrorKind.DUPLICATE_IDENTIFIER

    def __init__(self, book_id: int):
        self.book_id = book_id
        super().__init__(f"Book with id {book_id} already exists")


class ErrorNoUpdateData(BaseServiceException):
    kind = ErrorKind.NO_UPDATE_DATA
    detail = "No update data provided"


class ErrorImmutableFieldUpdate(BaseServiceException):
    kind = ErrorKind.IMMUTABLE_FIELD_UPDATE
    detail = "Cannot update id or createdAt"


class ErrorInvalidOrMissingGenre(BaseServiceException):
    kind = ErrorKind.INVALID_OR_MISSING_GENRE
    detail = "Invalid or missing genre"


class ErrorInvalidDiscountPercent(BaseServiceException):
    kind = ErrorKind.INVALID_DISCOUNT_PERCENT
    detail = "Invalid discount percentage"


class ErrorNoBooksForGenre(BaseServiceException):
    kind = ErrorKind.NO_BOOKS_FOR_GENRE

    def __init__(self, genre: str):
        self.genre = genre
        super().__init__(f"No books found for genre {genre}")

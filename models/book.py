from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr


class BookCreate(BaseModel):
    id: StrictInt = Field(gt=0)
    title: StrictStr = Field(min_length=1)
    author: StrictStr = Field(min_length=1)
    genre: StrictStr | None = None
    price: float | None = Field(default=None, ge=0, allow_inf_nan=False)


class BookUpdate(BaseModel):
    # omitted fields keep their default, an explicit null fails the type check
    title: StrictStr = Field(default=None, min_length=1)
    author: StrictStr = Field(default=None, min_length=1)
    genre: StrictStr = None
    price: float = Field(default=None, ge=0, allow_inf_nan=False)


class Book(BookCreate):
    model_config = ConfigDict(populate_by_name=True)

    created_at: datetime = Field(alias="createdAt")


class BookFilter(BaseModel):
    genre: str | None = None
    title: str | None = None
    author: str | None = None


class DiscountResult(BaseModel):
    genre: str
    discount_percentage: float
    total_discounted_price: float

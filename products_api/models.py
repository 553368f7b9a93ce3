# products_api/models.py
from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    description: str
    price: Union[int, float]
    category: str
    in_stock: bool = Field(alias="inStock")


class ProductPage(BaseModel):
    page: int
    limit: int
    total: int
    data: List[Product]

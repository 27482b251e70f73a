# catalog/models.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Union

class Product(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    description: str
    price: Union[int, float]
    category: str
    in_stock: bool = Field(True, alias="inStock")

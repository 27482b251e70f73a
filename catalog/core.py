from pydantic import BaseModel, Field
from typing import Optional, Dict, Any, Union

from .models import Product

class ProductIn(BaseModel):
    # wire key is the inStock alias only; in_stock in a body is ignored
    name: str
    description: str
    price: Union[int, float]
    category: str
    in_stock: bool = Field(True, alias="inStock")

class ProductUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Union[int, float]] = None
    category: Optional[str] = None
    in_stock: Optional[bool] = Field(None, alias="inStock")

    def changes(self) -> Dict[str, Any]:
        # only keys the client actually sent; falsy values such as 0/false still apply
        return self.model_dump(exclude_unset=True)

def _make_product(product_id: str, p: ProductIn) -> Product:
    return Product(
        id=product_id,
        name=p.name,
        description=p.description,
        price=p.price,
        category=p.category,
        in_stock=p.in_stock,
    )

def _product_json(p: Product) -> Dict[str, Any]:
    return p.model_dump(by_alias=True)

"""
SampleWeb Backend - Product Record
==================================

What:  The sample structured record bound by the doF/doG handlers.
How:   A pydantic model whose fields default to their zero values, so an
       empty instance is always valid and the binder can fill it field by
       field. It can also be built positionally: Product(1, "Pen", 1200).

Registered shape:
    name "ProductVO" → default model attribute "productVO"
    fields id (int), name (str), price (int)
"""

from typing import Optional

from pydantic import BaseModel, Field

from sampleweb.models.shape import FieldSpec, RecordShape, register_shape


class Product(BaseModel):
    """A product with an id, a display name, and a price."""

    id: int = Field(default=0, description="Product identifier")
    name: Optional[str] = Field(default=None, description="Product name")
    price: int = Field(default=0, description="Price in whole currency units")

    def __init__(self, id: int = 0, name: Optional[str] = None, price: int = 0, **data):
        super().__init__(id=id, name=name, price=price, **data)

    def __str__(self) -> str:
        return f"Product(id={self.id}, name={self.name}, price={self.price})"


PRODUCT_SHAPE = register_shape(
    RecordShape(
        name="ProductVO",
        record_type=Product,
        field_specs=(
            FieldSpec(name="id", value_type=int),
            FieldSpec(name="name", value_type=str),
            FieldSpec(name="price", value_type=int),
        ),
    )
)

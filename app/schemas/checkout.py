from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Optional
from pydantic import AliasChoices, BaseModel, Field


class CartItem(BaseModel):
    product_id: str = Field(..., alias="productId", min_length=1)
    quantity: int = Field(..., ge=1)

    class Config:
        populate_by_name = True


class Product(BaseModel):
    """catalog document as stored in the products collection."""

    name: str
    image_urls: List[str] = Field(default_factory=list, alias="imageUrls")
    # older catalog documents spell the field "Price"
    price: Decimal = Field(..., ge=0, validation_alias=AliasChoices("price", "Price"))
    sale_price: Optional[Decimal] = Field(None, ge=0, alias="salePrice")
    color_name: Optional[str] = Field(None, alias="colorName")

    class Config:
        populate_by_name = True
        extra = "ignore"

    @property
    def effective_price(self) -> Decimal:
        return self.sale_price if self.sale_price is not None else self.price


def to_minor_units(amount: Decimal) -> int:
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class LineItem(BaseModel):
    currency: str
    product_name: str
    images: List[str] = []
    unit_amount: int = Field(..., ge=0, description="Unit price in minor currency units")
    quantity: int = Field(..., ge=1)
    description: str

    def to_stripe(self) -> Dict[str, Any]:
        return {
            "price_data": {
                "currency": self.currency,
                "product_data": {
                    "name": self.product_name,
                    "images": list(self.images),
                },
                "unit_amount": self.unit_amount,
            },
            "quantity": self.quantity,
            # shown to admins in the dashboard
            "description": self.description,
        }


class CheckoutSessionResponse(BaseModel):
    id: str

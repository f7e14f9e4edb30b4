from typing import List, Literal, Optional, Union
from pydantic import BaseModel, Field

FulfillmentType = Literal["pickup", "gym", "delivery"]


class AddToCartRequest(BaseModel):
    item_id: int
    selected_option: Optional[str] = None
    quantity: int = Field(default=1, ge=1)


class UpdateCartRequest(BaseModel):
    line_key: str
    quantity: int


class RemoveCartLineRequest(BaseModel):
    line_key: str


class CheckoutRequest(BaseModel):
    """Checkout form fields; anything omitted keeps its saved draft value."""

    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    requested_date: Optional[str] = None
    fulfillment_type: Optional[FulfillmentType] = None
    delivery_address: Optional[str] = None
    note: Optional[str] = None

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class OrderItemSnapshot(BaseModel):
    id: Optional[int] = None
    name: str
    emoji: Optional[str] = None
    selectedOption: Optional[str] = None
    quantity: int = 1
    price: Optional[Union[float, str]] = None


class OrderEmailRequest(BaseModel):
    customer_name: str
    customer_email: str
    requested_date: Optional[str] = None
    fulfillment_type: str = "pickup"
    delivery_address: Optional[str] = None
    items: List[OrderItemSnapshot] = []
    total: Optional[Union[float, str]] = None
    note: Optional[str] = None
    admin_email: Optional[str] = None

    def order(self) -> dict:
        return self.model_dump(exclude={"admin_email"})

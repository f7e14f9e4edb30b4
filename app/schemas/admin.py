from typing import List, Optional, Union
from pydantic import BaseModel

PriceInput = Optional[Union[float, str]]
OptionsInput = Optional[Union[str, List[str]]]


class AdminLoginRequest(BaseModel):
    password: str


class AddItemRequest(BaseModel):
    name: str
    description: Optional[str] = None
    emoji: Optional[str] = None
    price: PriceInput = None
    options: OptionsInput = None


class UpdatePriceRequest(BaseModel):
    price: PriceInput = None


class UpdateOptionsRequest(BaseModel):
    options: OptionsInput = None


class UpdateDescriptionRequest(BaseModel):
    description: Optional[str] = None


class AdminEmailRequest(BaseModel):
    email: str = ""

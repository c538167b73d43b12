from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class CamelModel(BaseModel):
    # Wire format is camelCase; records and services use snake_case
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MessageResp(BaseModel):
    message: str


# Addresses

class AddressIn(CamelModel):
    # name is optional here so that a blank/missing name is a 400 from the
    # service rather than a schema error
    name: Optional[str] = None
    phone: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    zip_code: Optional[str] = None
    address: Optional[str] = None
    is_default: Optional[bool] = None


class AddressOut(CamelModel):
    address_id: str
    user_id: str
    name: str
    phone: str = ""
    country: str = ""
    city: str = ""
    zip_code: str = ""
    address: str = ""
    is_default: bool = False
    created_at: int
    updated_at: int


class AddressMutationResp(BaseModel):
    message: str
    address: AddressOut


# Orders

class OrderIn(CamelModel):
    product_id: Optional[int] = None
    product_name: Optional[str] = None
    product_image: Optional[str] = None
    product_price: Optional[Union[int, float]] = None
    buyer_name: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    city: Optional[str] = None
    postal: Optional[str] = None


class OrderOut(CamelModel):
    order_id: str
    product_id: int
    product_name: str
    product_image: str
    product_price: Union[int, float]
    buyer_name: str
    address: str
    phone: str
    city: str
    postal: str
    created_at: int


# Feelings

class FeelingMetaOut(CamelModel):
    type: str
    emoji: str
    description: str


class FeelingIn(CamelModel):
    type: Optional[str] = None
    intensity: Optional[int] = None
    emoji: Optional[str] = None
    description: Optional[str] = None


class FeelingOut(CamelModel):
    feeling_id: str
    post_id: str
    user_id: str
    type: str
    intensity: int
    emoji: str
    description: str = ""
    created_at: int
    updated_at: int


class FeelingPage(CamelModel):
    items: List[FeelingOut]
    next_cursor: Optional[str] = None

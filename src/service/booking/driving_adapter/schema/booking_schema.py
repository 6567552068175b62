from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _CamelAliasedRequest(BaseModel):
    """Accepts both snake_case and camelCase keys (member_id / memberId)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BookRequest(_CamelAliasedRequest):
    # Range checks happen in the booking engine so they answer with its message
    member_id: int
    inventory_item_id: int

    model_config = ConfigDict(
        json_schema_extra={'examples': [{'member_id': 1, 'inventory_item_id': 1}]}
    )


class CancelRequest(_CamelAliasedRequest):
    booking_id: int

    model_config = ConfigDict(json_schema_extra={'examples': [{'booking_id': 1}]})


class BookResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'message': 'Booking successful',
                'booking_id': 1,
                'booking_datetime': '2025-01-10T10:30:00Z',
            }
        }
    )

    message: str
    booking_id: int
    booking_datetime: datetime


class CancelResponse(BaseModel):
    message: str
    booking_id: int

"""Order response schemas."""

from pydantic import BaseModel


class OrderResponse(BaseModel):
    """An order value returned verbatim from the store."""

    order: str

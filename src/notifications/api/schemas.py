"""Pydantic request/response models for the Notifications API.

API schemas are separate from the dispatch internals (anti-corruption pattern).
"""

from pydantic import BaseModel, Field


class SendMessageRequest(BaseModel):
    text: str = Field(..., min_length=1, examples=["<b>New Order</b>"])
    parse_mode: str = Field(default="HTML", examples=["HTML"])


class SendMessageResponse(BaseModel):
    success: bool
    delivered: int
    failed: int
    errors: list[str] = Field(default_factory=list)

"""Pydantic response schemas for the Catalogue API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class MerchItemSchema(BaseModel):
    id: str
    name: str
    image: str | None = None
    tone: str | None = None
    tag: str | None = None
    price: float = Field(ge=0)
    sizes: list[str]


class MerchListResponse(BaseModel):
    items: list[MerchItemSchema]

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [
                        {
                            "id": "b7a4c1d2-0000-4000-8000-000000000001",
                            "name": "ADPH 2026 Shirt",
                            "image": "/merch/shirt.png",
                            "tone": "teal",
                            "tag": "Apparel",
                            "price": 500.0,
                            "sizes": ["S", "M", "L", "XL"],
                        }
                    ]
                }
            ]
        }
    }

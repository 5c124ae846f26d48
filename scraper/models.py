# scraper/models.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class ProductInfoEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    value: str


class ItemRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    url: str = Field(..., description="Detail page the record was scraped from")
    category: str
    title: str
    rating: str  # One..Five
    description: str
    product_info: List[ProductInfoEntry] = Field(..., alias="productInfo")
    image_url: str = Field(..., alias="imageUrl")

    def product_value(self, key: str) -> Optional[str]:
        """Return the value of the first attribute table entry named `key`."""
        for entry in self.product_info:
            if entry.key == key:
                return entry.value
        return None

    def to_document(self) -> dict:
        """Serialize to the camelCase shape used by the JSON output file."""
        return self.model_dump(by_alias=True)


class AssetDescriptor(BaseModel):
    url: str
    identifier: str

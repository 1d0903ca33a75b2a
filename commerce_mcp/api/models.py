"""
Pydantic v2 models for the product catalog and the search_products tool.

Products are frozen: the catalog is read-only for the life of the process.
The tool input uses extra="forbid" so unknown arguments are rejected at the
protocol boundary, before any search runs.
"""
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    """A single catalog entry as rendered by the shop widget."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(..., min_length=1, description="Unique product identifier")
    name: str = Field(..., description="Display name")
    category: str = Field(..., description="Catalog category, e.g. 'Power Tools'")
    price: float = Field(..., ge=0, description="Unit price (currency-agnostic)")
    description: str = Field(..., description="Free-text product description")
    image: str = Field(..., description="Image URL shown by the widget")
    inStock: bool = Field(..., description="Availability flag")
    rating: float = Field(..., ge=0, le=5, description="Average rating (0-5)")


class SearchProductsInput(BaseModel):
    """Arguments accepted by the search_products tool."""
    model_config = ConfigDict(extra="forbid")

    query: str = Field(
        ...,
        min_length=1,
        description="Product search query (e.g., 'drill', 'hammer', 'power tools')",
    )
    category: Optional[str] = Field(
        None,
        description="Filter by category (e.g., 'Power Tools', 'Hand Tools')",
    )


class TextItem(BaseModel):
    """Human-readable content block in a tool reply."""
    type: Literal["text"] = "text"
    text: str


class ProductsPayload(BaseModel):
    """Machine-readable payload bound by the widget."""
    products: List[Product] = Field(default_factory=list)


class ReplyEnvelope(BaseModel):
    """
    Tool reply: an optional message plus the structured product payload.

    structuredContent.products is always present, even on the message-only
    paths, so the widget never has to handle a missing list.
    """
    content: List[TextItem] = Field(default_factory=list)
    structuredContent: ProductsPayload = Field(default_factory=ProductsPayload)

    @property
    def message(self) -> Optional[str]:
        return self.content[0].text if self.content else None

    @property
    def products(self) -> List[Product]:
        return self.structuredContent.products

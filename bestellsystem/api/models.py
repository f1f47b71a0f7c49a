"""API request and response models."""

from datetime import date
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

# Raw form input: German ("12,98") or English ("12.98") strings, or numbers
RawValue = Optional[Union[str, int, float]]


class CreateOrderRequest(BaseModel):
    """Request model for creating an ordering session."""

    profile: Optional[str] = Field(None, description="Form profile name, e.g. 'default' or 'sample'")


class LineItemResponse(BaseModel):
    """Response model for a single line item (amounts as 2dp strings)."""

    id: str
    article_number: str = ""
    description: str = ""
    quantity: int
    unit_price: str
    line_total: str


class TotalsResponse(BaseModel):
    """Response model for order totals."""

    subtotal: str
    shipping_cost: str
    tax_rate: str
    tax_amount: str
    gross_total: str
    discount_rate: str
    discount_window_days: int
    discount_amount: str
    net_after_discount: str


class OrderResponse(BaseModel):
    """Response model for the state of an ordering session."""

    session_id: str
    order_number: str = ""
    profile: str
    items: List[LineItemResponse]
    totals: TotalsResponse
    details: Dict[str, Any] = Field(default_factory=dict)


class ItemUpdateRequest(BaseModel):
    """Request model for editing one field of a line item."""

    field: str = Field(..., description="quantity, unit_price, description or article_number")
    value: RawValue = Field(None, description="Raw input; invalid numbers are clamped")


class AdjustmentsRequest(BaseModel):
    """Request model for shipping, tax and Skonto. Omitted fields are unchanged."""

    shipping_cost: RawValue = None
    tax_rate: RawValue = None
    discount_rate: RawValue = None
    discount_window_days: RawValue = None


class DetailsRequest(BaseModel):
    """Request model for administrative order fields. Omitted fields are unchanged."""

    supplier_name: Optional[str] = None
    supplier_address: Optional[str] = None
    supplier_fax: Optional[str] = None
    delivery_building: Optional[str] = None
    contact_person: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_fax: Optional[str] = None
    chapter: Optional[str] = None
    title_tg: Optional[str] = None
    cost_center: Optional[str] = None
    cost_bearer: Optional[str] = None
    expenditure_type: Optional[str] = None
    cost_type: Optional[str] = None
    funds_amount: RawValue = None
    business_use: Optional[bool] = None
    business_use_percent: Optional[int] = Field(None, ge=0, le=100)
    order_date: Optional[date] = None
    notes: Optional[str] = None


class OrderNumberRequest(BaseModel):
    """Request model for order number generation."""

    scheme: str = Field("unique", description="'sequence' or 'unique'")
    sequence: Union[int, str] = 1
    contact_person: Optional[str] = None
    year: Optional[str] = Field(None, max_length=2)
    department: Optional[str] = Field(None, max_length=5)


class OrderNumberResponse(BaseModel):
    """Response model for a generated order number."""

    order_number: str
    scheme: str


class SubmissionResponse(BaseModel):
    """Response model for a submitted order."""

    order_number: str = ""
    timestamp: str
    line_count: int
    totals: TotalsResponse
    print_view: str


class CreditCardRequestModel(BaseModel):
    """Request model for a virtual credit card request."""

    organization_unit: str = ""
    cost_center: str = ""
    service_description: str = ""
    supplier: str = ""
    estimated_amount: RawValue = None
    delivery_country: str = "deutschland"
    eu_regulation_agreement: bool = False
    ordering_agreement: bool = False
    notes: str = ""
    request_date: Optional[date] = None
    order_number: str = ""


class CreditCardSubmissionResponse(BaseModel):
    """Response model for a submitted credit card request."""

    status: str
    timestamp: str
    order_number: str = ""
    estimated_amount: Optional[str] = None
    warnings: List[str] = Field(default_factory=list)


class ExpenseCategoryResponse(BaseModel):
    """Response model for one expense category (Kostenart)."""

    code: str
    name: str
    description: str = ""

"""FastAPI application for the ordering system REST API."""

import logging
import uuid
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException

from ..config import get_app_name, get_app_version
from ..config.category_loader import get_expense_categories
from ..engine.order_number import OrderNumberScheme, generate
from ..engine.validation import FormValidationError
from ..export.renderers import PrintRenderer
from ..session.credit_card_form import CreditCardFormSession
from ..session.ordering_system import OrderingSystem
from ..session.shared_order_number import SharedOrderNumber
from .models import (
    AdjustmentsRequest,
    CreateOrderRequest,
    CreditCardRequestModel,
    CreditCardSubmissionResponse,
    DetailsRequest,
    ExpenseCategoryResponse,
    ItemUpdateRequest,
    LineItemResponse,
    OrderNumberRequest,
    OrderNumberResponse,
    OrderResponse,
    SubmissionResponse,
    TotalsResponse,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Bestellsystem API",
    description="REST API für Bestellformular, virtuelle Kreditkarte und Auftragsnummern",
    version=get_app_version(),
)

# In-memory session storage (no persistence)
_sessions: Dict[str, OrderingSystem] = {}


def _get_session(session_id: str) -> OrderingSystem:
    """Get ordering session from storage."""
    if session_id not in _sessions:
        raise HTTPException(status_code=404, detail=f"Order session {session_id} not found")
    return _sessions[session_id]


def _order_response(session_id: str, system: OrderingSystem) -> OrderResponse:
    form = system.order_form
    return OrderResponse(
        session_id=session_id,
        order_number=form.order_number,
        profile=form.profile_name,
        items=[LineItemResponse(**item.to_dict()) for item in form.items],
        totals=TotalsResponse(**form.totals.to_dict()),
        details=form.details.to_dict(),
    )


def _effective_scheme(scheme: str) -> str:
    if scheme in {s.value for s in OrderNumberScheme}:
        return scheme
    return OrderNumberScheme.UNIQUE.value


def _validation_error(e: FormValidationError) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail={"message": str(e), "errors": e.result.errors, "warnings": e.result.warnings},
    )


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": get_app_name(),
        "version": get_app_version(),
        "docs": "/docs",
    }


@app.get("/api/expense-categories", response_model=List[ExpenseCategoryResponse])
async def list_expense_categories():
    """List all expense categories (Kostenarten)."""
    return [
        ExpenseCategoryResponse(code=c.code, name=c.name, description=c.description)
        for c in get_expense_categories()
    ]


@app.post("/api/orders", response_model=OrderResponse, status_code=201)
async def create_order(request: Optional[CreateOrderRequest] = None):
    """Start a new ordering session.

    Args:
        request: Optional profile to seed the form with

    Returns:
        OrderResponse with session_id, one empty item and zero totals
    """
    profile_name = request.profile if request else None
    try:
        system = OrderingSystem(profile_name=profile_name)
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    session_id = uuid.uuid4().hex
    _sessions[session_id] = system
    logger.debug("Created order session %s", session_id)
    return _order_response(session_id, system)


@app.get("/api/orders/{session_id}", response_model=OrderResponse)
async def get_order(session_id: str):
    """Get the current state of an ordering session."""
    return _order_response(session_id, _get_session(session_id))


@app.delete("/api/orders/{session_id}")
async def delete_order(session_id: str):
    """Discard an ordering session."""
    _get_session(session_id)
    del _sessions[session_id]
    return {"message": f"Order session {session_id} deleted"}


@app.post("/api/orders/{session_id}/items", response_model=OrderResponse)
async def add_item(session_id: str):
    """Append an empty line item."""
    system = _get_session(session_id)
    system.order_form.add_item()
    return _order_response(session_id, system)


@app.patch("/api/orders/{session_id}/items/{item_id}", response_model=OrderResponse)
async def update_item(session_id: str, item_id: str, request: ItemUpdateRequest):
    """Edit one field of a line item.

    Invalid numbers are clamped (quantity to 1, price to 0); an unknown
    item id leaves the order unchanged.
    """
    system = _get_session(session_id)
    try:
        system.order_form.update_item(item_id, request.field, request.value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _order_response(session_id, system)


@app.delete("/api/orders/{session_id}/items/{item_id}", response_model=OrderResponse)
async def remove_item(session_id: str, item_id: str):
    """Remove a line item; the last remaining item is never removed."""
    system = _get_session(session_id)
    system.order_form.remove_item(item_id)
    return _order_response(session_id, system)


@app.put("/api/orders/{session_id}/adjustments", response_model=OrderResponse)
async def set_adjustments(session_id: str, request: AdjustmentsRequest):
    """Set shipping cost, tax rate and Skonto."""
    system = _get_session(session_id)
    system.order_form.set_adjustments(**request.model_dump())
    return _order_response(session_id, system)


@app.put("/api/orders/{session_id}/details", response_model=OrderResponse)
async def set_details(session_id: str, request: DetailsRequest):
    """Set supplier, delivery and funding fields."""
    system = _get_session(session_id)
    try:
        system.order_form.update_details(**request.model_dump(exclude_none=True))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _order_response(session_id, system)


@app.post("/api/orders/{session_id}/order-number", response_model=OrderNumberResponse)
async def generate_session_order_number(session_id: str, request: Optional[OrderNumberRequest] = None):
    """Generate an order number and share it with both forms of the session."""
    system = _get_session(session_id)
    request = request or OrderNumberRequest()
    number = system.order_form.generate_order_number(
        request.scheme,
        request.sequence,
        year=request.year,
        department=request.department,
        contact_person=request.contact_person,
    )
    return OrderNumberResponse(order_number=number, scheme=_effective_scheme(request.scheme))


@app.post("/api/orders/{session_id}/submit", response_model=SubmissionResponse)
async def submit_order(session_id: str):
    """Validate and submit the order.

    Returns 422 with the field errors if required fields are missing.
    """
    system = _get_session(session_id)
    try:
        snapshot = system.order_form.submit()
    except FormValidationError as e:
        raise _validation_error(e)

    return SubmissionResponse(
        order_number=snapshot.order_number,
        timestamp=snapshot.timestamp.isoformat(),
        line_count=snapshot.line_count,
        totals=TotalsResponse(**snapshot.totals.to_dict()),
        print_view=PrintRenderer().render(snapshot),
    )


@app.post("/api/order-numbers", response_model=OrderNumberResponse)
async def generate_order_number(request: OrderNumberRequest):
    """Generate an order number without a session."""
    number = generate(
        request.scheme,
        contact_person=request.contact_person,
        sequence=request.sequence,
        year=request.year,
        department=request.department,
    )
    return OrderNumberResponse(order_number=number, scheme=_effective_scheme(request.scheme))


@app.post("/api/credit-card-requests", response_model=CreditCardSubmissionResponse)
async def submit_credit_card_request(request: CreditCardRequestModel, session_id: Optional[str] = None):
    """Validate and submit a virtual credit card request.

    With session_id, the order number of that ordering session is used.
    Returns 422 with the field errors if required fields or agreements are missing.
    """
    if session_id is not None:
        form = _get_session(session_id).credit_card_form
    else:
        form = CreditCardFormSession(SharedOrderNumber())

    values = request.model_dump(exclude_none=True)
    if not values.get("order_number"):
        values.pop("order_number", None)
    form.update(**values)

    try:
        submission = form.submit()
    except FormValidationError as e:
        raise _validation_error(e)

    amount = submission.request.estimated_amount
    return CreditCardSubmissionResponse(
        status=submission.status,
        timestamp=submission.timestamp.isoformat(),
        order_number=submission.request.order_number,
        estimated_amount=str(amount) if amount is not None else None,
        warnings=form.validate().warnings,
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=8000)

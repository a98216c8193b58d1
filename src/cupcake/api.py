"""FastAPI REST API for cupcake order sessions."""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from . import __version__
from .config_store import SCHEMA_VERSION, load_config
from .errors import (
    ConfigExistsError,
    ConfigNotFoundError,
    CupcakeError,
    InvalidConfigError,
    InvalidSchemaVersionError,
    InvalidSelectionError,
    InvalidTransitionError,
    SessionNotFoundError,
)
from .session import OrderSession
from .session_store import SessionStore
from .summary import RecordingShareTarget
from .utils import format_amount, use_system_locale


# --- Pydantic Schemas ---


class QuantityOptionSchema(BaseModel):
    label: str
    quantity: int


class OptionsResponse(BaseModel):
    quantity_options: list[QuantityOptionSchema]
    flavors: list[str]
    unit_price: str
    pickup_surcharge: str
    pickup_days: int
    currency_symbol: str


class OrderSchema(BaseModel):
    quantity: int
    flavor: str
    pickup_date: str
    price: str  # two-decimal amount, e.g. "15.00"
    formatted_price: str  # e.g. "$15.00"
    pickup_options: list[str]


class SessionSchema(BaseModel):
    id: str
    screen: str  # "Start"|"Flavor"|"Pickup"|"Summary"
    can_navigate_back: bool
    back_stack: list[str]
    order: OrderSchema
    created_at: str
    updated_at: str


class SessionListResponse(BaseModel):
    sessions: list[SessionSchema]
    count: int


class QuantityRequest(BaseModel):
    quantity: int = Field(..., description="One of the shop's quantity options")


class FlavorRequest(BaseModel):
    flavor: str = Field(..., description="One of the shop's flavors")


class PickupDateRequest(BaseModel):
    pickup_date: str = Field(..., description="One of the session's pickup_options")


class SummarySchema(BaseModel):
    subject: str
    body: str


class SendResponse(BaseModel):
    summary: SummarySchema
    session: SessionSchema


# --- Helper Functions ---


_session_store: SessionStore | None = None


def get_session_store() -> SessionStore:
    """Get the process-wide SessionStore, creating it on first use."""
    global _session_store
    if _session_store is None:
        use_system_locale()
        _session_store = SessionStore(load_config(), share=RecordingShareTarget())
    return _session_store


def set_session_store(store: SessionStore | None) -> None:
    """Replace the process-wide SessionStore (None recreates it lazily)."""
    global _session_store
    _session_store = store


def session_to_schema(session: OrderSession) -> SessionSchema:
    """Convert an OrderSession to its Pydantic schema."""
    return SessionSchema(**session.to_dict())


# --- FastAPI App ---


app = FastAPI(
    title="cupcake API",
    description="REST API for building and sending cupcake orders",
    version=__version__,
)

# CORS for local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Global Exception Handler ---


# Map exception types to HTTP status codes
ERROR_STATUS_CODES: dict[type, int] = {
    InvalidSelectionError: 400,
    InvalidTransitionError: 409,
    SessionNotFoundError: 404,
    ConfigNotFoundError: 500,
    ConfigExistsError: 500,
    InvalidSchemaVersionError: 500,
    InvalidConfigError: 500,
}


@app.exception_handler(CupcakeError)
async def cupcake_error_handler(request: Request, exc: CupcakeError) -> JSONResponse:
    """Map CupcakeError subclasses to appropriate HTTP responses."""
    status_code = ERROR_STATUS_CODES.get(type(exc), 500)
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error_type": type(exc).__name__},
    )


# --- Endpoints ---


@app.get("/api/health")
def health_check():
    """Health check endpoint."""
    store = get_session_store()
    return {
        "status": "ok",
        "session_count": len(store),
        "schema_version": SCHEMA_VERSION,
    }


@app.get("/api/options", response_model=OptionsResponse)
def get_options():
    """List the shop's quantities, flavors and prices."""
    config = get_session_store().config
    return OptionsResponse(
        quantity_options=[QuantityOptionSchema(**o.to_dict()) for o in config.quantity_options],
        flavors=config.flavors,
        unit_price=format_amount(config.unit_price),
        pickup_surcharge=format_amount(config.pickup_surcharge),
        pickup_days=config.pickup_days,
        currency_symbol=config.currency_symbol,
    )


# --- Session Endpoints ---


@app.get("/api/sessions", response_model=SessionListResponse)
def list_sessions():
    """List all open sessions."""
    sessions = get_session_store().list_sessions()
    return SessionListResponse(
        sessions=[session_to_schema(s) for s in sessions],
        count=len(sessions),
    )


@app.post("/api/sessions", response_model=SessionSchema, status_code=201)
def create_session():
    """Start a new order on the Start screen."""
    session = get_session_store().create()
    return session_to_schema(session)


@app.get("/api/sessions/{session_id}", response_model=SessionSchema)
def get_session(session_id: str):
    """Get the current screen and order for a session."""
    return session_to_schema(get_session_store().get(session_id))


@app.delete("/api/sessions/{session_id}", response_model=SessionSchema)
def delete_session(session_id: str):
    """Discard a session."""
    return session_to_schema(get_session_store().remove(session_id))


@app.post("/api/sessions/{session_id}/quantity", response_model=SessionSchema)
def select_quantity(session_id: str, request: QuantityRequest):
    """Choose a quantity on Start and advance to Flavor."""
    session = get_session_store().get(session_id)
    session.flow.select_quantity(request.quantity)
    return session_to_schema(session)


@app.post("/api/sessions/{session_id}/flavor", response_model=SessionSchema)
def set_flavor(session_id: str, request: FlavorRequest):
    """Choose a flavor on Flavor. The screen does not change."""
    session = get_session_store().get(session_id)
    session.flow.select_flavor(request.flavor)
    return session_to_schema(session)


@app.post("/api/sessions/{session_id}/pickup-date", response_model=SessionSchema)
def set_pickup_date(session_id: str, request: PickupDateRequest):
    """Choose a pickup date on Pickup. The screen does not change."""
    session = get_session_store().get(session_id)
    session.flow.select_pickup_date(request.pickup_date)
    return session_to_schema(session)


@app.post("/api/sessions/{session_id}/next", response_model=SessionSchema)
def go_next(session_id: str):
    """Advance from Flavor to Pickup or from Pickup to Summary."""
    session = get_session_store().get(session_id)
    session.flow.next()
    return session_to_schema(session)


@app.post("/api/sessions/{session_id}/back", response_model=SessionSchema)
def go_back(session_id: str):
    """Return to the previous screen, keeping the order."""
    session = get_session_store().get(session_id)
    session.flow.navigate_up()
    return session_to_schema(session)


@app.post("/api/sessions/{session_id}/cancel", response_model=SessionSchema)
def cancel_order(session_id: str):
    """Discard the order and return to Start."""
    session = get_session_store().get(session_id)
    session.flow.cancel()
    return session_to_schema(session)


@app.post("/api/sessions/{session_id}/send", response_model=SendResponse)
def send_order(session_id: str):
    """Send the order summary and start over."""
    session = get_session_store().get(session_id)
    summary = session.flow.send()
    return SendResponse(
        summary=SummarySchema(**summary.to_dict()),
        session=session_to_schema(session),
    )

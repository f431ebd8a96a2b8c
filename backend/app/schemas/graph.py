"""Pydantic schemas for graph node endpoints."""
from datetime import date
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class NodeOut(BaseModel):
    id: str
    labels: list[str]
    properties: dict[str, Any]


class NodeListResponse(BaseModel):
    nodes: list[NodeOut]


# ─── Product ───

class ProductCreate(BaseModel):
    name: str = Field(min_length=1)
    category: str = Field(min_length=1)
    price: float = Field(ge=0)
    tags: list[str]
    expiration_date: date


class ProductOut(BaseModel):
    id: str
    Name: str
    Category: str
    Price: float
    Tags: list[str] = []
    Expiration_date: str | None = None
    Voided: bool = False


# ─── Provider ───

class ProviderCreate(BaseModel):
    id: int = Field(gt=0)
    name: str = Field(min_length=3)
    location: str = Field(min_length=3)


class ProviderUpdate(BaseModel):
    name: str = Field(min_length=3)
    location: str = Field(min_length=3)


class ProviderOut(BaseModel):
    id: str
    ID: int | str | None = None
    Name: str
    Location: str | None = None
    Voided: bool = False


class ProviderDetail(ProviderOut):
    """Provider plus the nodes it supplies, uses and receives orders from."""
    branchOffices: list[dict[str, Any]] = []
    routes: list[dict[str, Any]] = []
    buyOrders: list[dict[str, Any]] = []


class ProviderSearchResponse(BaseModel):
    count: int
    providers: list[ProviderDetail]


# ─── Branch office ───

class BranchOfficeCreate(BaseModel):
    name: str = Field(min_length=1)
    location: str = Field(min_length=1)
    income: float


class BranchOfficeOut(BaseModel):
    id: str
    ID: int | str | None = None
    Name: str
    Location: str | None = None
    Income: float | None = None
    Voided: bool = False


# ─── Invoice ───

class InvoiceCreate(BaseModel):
    id: int = Field(gt=0)
    name: str = Field(min_length=3)
    nit: str = Field(min_length=8)
    total: float = Field(gt=0)
    cashier_main: str
    date: date
    status: str
    notes: str | None = None


class InvoiceOut(BaseModel):
    id: str
    ID: int | str | None = None
    Name: str
    NIT: str | None = None
    Total: float | None = None
    Cashier_main: str | None = None
    Date: str | None = None
    Status: str | None = None
    Notes: str | None = None
    Voided: bool = False


# ─── Buy order ───

class BuyOrderDate(BaseModel):
    year: int = Field(ge=1)
    month: int = Field(ge=1, le=12)
    day: int = Field(ge=1, le=31)

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)


class BuyOrderCreate(BaseModel):
    id: str = Field(min_length=1)
    status: str
    total: float = Field(ge=0)
    items: list[str]
    date: BuyOrderDate
    voided: bool = False

    @model_validator(mode="after")
    def check_calendar_date(self):
        # ranges alone accept 2025-02-30
        self.date.to_date()
        return self


class BuyOrderOut(BaseModel):
    id: str
    ID: str
    Status: str
    Total: float
    Items: list[str] = []
    Date: str | None = None
    Voided: bool = False


# ─── Route ───

class RouteCreate(BaseModel):
    quantity: int = Field(ge=0)
    delivery_name: str = Field(min_length=1)
    arrive_date: date
    arrive_hour: str
    company: str
    distance_km: float = Field(ge=0)


class RouteOut(BaseModel):
    id: str
    Quantity: int | None = None
    Delivery_name: str | None = None
    Arrive_date: str | None = None
    Arrive_hour: str | None = None
    Company: str | None = None
    Distance_KM: float | None = None
    Voided: bool = False


# ─── Relationships ───

class RelationshipCreate(BaseModel):
    """Link two existing nodes by element id; accepts ``sourceId``/``targetId`` too."""
    model_config = ConfigDict(populate_by_name=True)

    source_id: str = Field(min_length=1, alias="sourceId")
    target_id: str = Field(min_length=1, alias="targetId")


class ProductRelationshipCreate(RelationshipCreate):
    target_type: Literal["product", "provider", "branchOffice"] = Field(default="product", alias="targetType")
    create_date: date | None = None
    time_to_create: int | None = None
    actual_stock: int | None = None
    buy_date: date | None = None
    minimum_stock: int | None = None


class ProviderRelationshipCreate(RelationshipCreate):
    target_type: Literal["branchOffice", "route"] = Field(alias="targetType")
    quantity_of_orders_in_time: int | None = None
    type_product: str | None = None
    range_client: str | None = None
    cost_of_operation: float | None = None
    status_payment: str | None = None
    type_vehicle: str | None = None


class BranchOfficeRelationshipCreate(RelationshipCreate):
    target_type: Literal["invoice"] = Field(default="invoice", alias="targetType")


class InvoiceRelationshipCreate(RelationshipCreate):
    target_type: Literal["product"] = Field(default="product", alias="targetType")
    quantity: int | None = Field(default=None, gt=0)


class RelationshipOut(BaseModel):
    id: str
    source: str
    target: str
    type: str
    properties: dict[str, Any] = {}


class MessageResponse(BaseModel):
    message: str

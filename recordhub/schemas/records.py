"""Request/response schemas for the owner-scoped record families.

Each family has a ``*Create`` schema (required fields plus creation defaults)
and a ``*Read`` schema. Families that support partial updates also have an
``*Update`` schema whose fields are all optional; only the fields a client
actually sends are applied.

Money and quantities are ``Decimal`` and serialize as strings in JSON.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


def _now() -> datetime:
    return datetime.now(timezone.utc)


class OwnedRecordCreate(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    user_id: int


class OwnedRecordUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)


class OwnedRecordRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


class HealthRecordCreate(OwnedRecordCreate):
    record_type: str = Field(..., min_length=1)
    value: str = Field(..., min_length=1)
    unit: Optional[str] = None
    notes: Optional[str] = None
    recorded_at: datetime = Field(default_factory=_now)


class HealthRecordRead(OwnedRecordRead):
    record_type: str
    value: str
    unit: Optional[str]
    notes: Optional[str]
    recorded_at: datetime


class AppointmentCreate(OwnedRecordCreate):
    title: str = Field(..., min_length=1)
    provider_name: str = Field(..., min_length=1)
    appointment_date: datetime
    location: Optional[str] = None
    notes: Optional[str] = None
    status: str = "scheduled"


class AppointmentRead(OwnedRecordRead):
    title: str
    provider_name: str
    appointment_date: datetime
    location: Optional[str]
    notes: Optional[str]
    status: str


class MedicationCreate(OwnedRecordCreate):
    name: str = Field(..., min_length=1)
    dosage: str = Field(..., min_length=1)
    frequency: str = Field(..., min_length=1)
    taken: bool = False
    next_dose: Optional[datetime] = None
    notes: Optional[str] = None


class MedicationUpdate(OwnedRecordUpdate):
    name: Optional[str] = None
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    taken: Optional[bool] = None
    next_dose: Optional[datetime] = None
    notes: Optional[str] = None


class MedicationRead(OwnedRecordRead):
    name: str
    dosage: str
    frequency: str
    taken: bool
    next_dose: Optional[datetime]
    notes: Optional[str]


class AiDiagnosisCreate(OwnedRecordCreate):
    symptoms: str = Field(..., min_length=1)
    diagnosis: str = Field(..., min_length=1)
    confidence: Decimal = Field(..., ge=0, le=1)
    recommendations: Optional[str] = None
    verified: bool = False
    timestamp: datetime = Field(default_factory=_now)


class AiDiagnosisRead(OwnedRecordRead):
    symptoms: str
    diagnosis: str
    confidence: Decimal
    recommendations: Optional[str]
    verified: bool
    timestamp: datetime


class PatientConsentCreate(OwnedRecordCreate):
    consent_type: str = Field(..., min_length=1)
    purpose: str = Field(..., min_length=1)
    granted: bool = False
    expires_at: Optional[datetime] = None
    timestamp: datetime = Field(default_factory=_now)


class PatientConsentRead(OwnedRecordRead):
    consent_type: str
    purpose: str
    granted: bool
    expires_at: Optional[datetime]
    timestamp: datetime


class TreatmentActionCreate(OwnedRecordCreate):
    action_type: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    performed_by: str = Field(..., min_length=1)
    verified: bool = False
    timestamp: datetime = Field(default_factory=_now)


class TreatmentActionRead(OwnedRecordRead):
    action_type: str
    description: str
    performed_by: str
    verified: bool
    timestamp: datetime


# ---------------------------------------------------------------------------
# Finance
# ---------------------------------------------------------------------------


class TransactionCreate(OwnedRecordCreate):
    description: str = Field(..., min_length=1)
    amount: Decimal
    category: str = Field(..., min_length=1)
    transaction_type: Literal["income", "expense"]
    date: datetime = Field(default_factory=_now)


class TransactionRead(OwnedRecordRead):
    description: str
    amount: Decimal
    category: str
    transaction_type: str
    date: datetime


class BudgetCreate(OwnedRecordCreate):
    category: str = Field(..., min_length=1)
    limit_amount: Decimal = Field(..., ge=0)
    spent: Decimal = Decimal("0")
    period: str = "monthly"


class BudgetRead(OwnedRecordRead):
    category: str
    limit_amount: Decimal
    spent: Decimal
    period: str


class ExpenseCreate(OwnedRecordCreate):
    description: str = Field(..., min_length=1)
    amount: Decimal
    category: str = Field(..., min_length=1)
    subcategory: Optional[str] = None
    date: datetime = Field(default_factory=_now)
    is_recurring: bool = False
    tags: List[str] = Field(default_factory=list)
    location: Optional[str] = None


class ExpenseRead(OwnedRecordRead):
    description: str
    amount: Decimal
    category: str
    subcategory: Optional[str]
    date: datetime
    is_recurring: bool
    tags: List[str]
    location: Optional[str]


class PortfolioItemCreate(OwnedRecordCreate):
    symbol: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    asset_type: Literal["crypto", "stock"]
    quantity: Decimal = Field(..., ge=0)
    average_price: Decimal = Field(..., ge=0)
    current_price: Optional[Decimal] = Field(default=None, ge=0)


class PortfolioItemRead(OwnedRecordRead):
    symbol: str
    name: str
    asset_type: str
    quantity: Decimal
    average_price: Decimal
    current_price: Decimal
    total_value: Decimal
    gain_loss: Decimal
    gain_loss_percent: Decimal
    last_updated: datetime


# ---------------------------------------------------------------------------
# Personal
# ---------------------------------------------------------------------------


class TaskCreate(OwnedRecordCreate):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    status: str = "pending"
    priority: Literal["low", "medium", "high"] = "medium"
    completed: bool = False
    due_date: Optional[datetime] = None


class TaskUpdate(OwnedRecordUpdate):
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[Literal["low", "medium", "high"]] = None
    completed: Optional[bool] = None
    due_date: Optional[datetime] = None


class TaskRead(OwnedRecordRead):
    title: str
    description: Optional[str]
    status: str
    priority: str
    completed: bool
    due_date: Optional[datetime]


class GoalCreate(OwnedRecordCreate):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    target: Decimal = Field(..., ge=0)
    current: Decimal = Decimal("0")
    category: str = Field(..., min_length=1)
    deadline: Optional[datetime] = None


class GoalRead(OwnedRecordRead):
    title: str
    description: Optional[str]
    target: Decimal
    current: Decimal
    category: str
    deadline: Optional[datetime]


class MoodLogCreate(OwnedRecordCreate):
    mood: int = Field(..., ge=1, le=10)
    energy: Optional[int] = Field(default=None, ge=1, le=10)
    notes: Optional[str] = None
    date: datetime = Field(default_factory=_now)


class MoodLogRead(OwnedRecordRead):
    mood: int
    energy: Optional[int]
    notes: Optional[str]
    date: datetime


# ---------------------------------------------------------------------------
# B2B
# ---------------------------------------------------------------------------


class LeadCreate(OwnedRecordCreate):
    name: str = Field(..., min_length=1)
    company: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    source: Optional[str] = None
    value: Optional[Decimal] = None
    status: str = "cold"


class LeadRead(OwnedRecordRead):
    name: str
    company: str
    email: str
    phone: Optional[str]
    source: Optional[str]
    value: Optional[Decimal]
    status: str


class InvoiceCreate(OwnedRecordCreate):
    client_name: str = Field(..., min_length=1)
    amount: Decimal = Field(..., ge=0)
    due_date: datetime
    description: Optional[str] = None
    status: str = "pending"


class InvoiceRead(OwnedRecordRead):
    client_name: str
    amount: Decimal
    due_date: datetime
    description: Optional[str]
    status: str


# ---------------------------------------------------------------------------
# Government
# ---------------------------------------------------------------------------


class ApplicationCreate(OwnedRecordCreate):
    application_type: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    status: str = "pending"
    submitted_at: datetime = Field(default_factory=_now)


class ApplicationRead(OwnedRecordRead):
    application_type: str
    title: str
    description: Optional[str]
    status: str
    submitted_at: datetime


class DocumentCreate(OwnedRecordCreate):
    name: str = Field(..., min_length=1)
    document_type: str = Field(..., min_length=1)
    file_url: Optional[str] = None
    status: str = "pending"
    verification_date: Optional[datetime] = None


class DocumentRead(OwnedRecordRead):
    name: str
    document_type: str
    file_url: Optional[str]
    status: str
    verification_date: Optional[datetime]


class ComplaintCreate(OwnedRecordCreate):
    subject: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    department: str = Field(..., min_length=1)
    status: str = "pending"


class ComplaintRead(OwnedRecordRead):
    subject: str
    description: str
    department: str
    status: str

"""Registry of owned record families exposed by the API."""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict

from recordhub.database import models
from recordhub.schemas import records as schemas
from recordhub.services.records.record_service import RecordFamily

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def value_portfolio_item(values: Dict[str, Any]) -> Dict[str, Any]:
    """Fill in current price and the derived valuation of a holding.

    The current price falls back to the average purchase price. Gain/loss
    percent is relative to the cost basis and 0 when the basis is 0.
    """
    quantity: Decimal = values["quantity"]
    average_price: Decimal = values["average_price"]
    current_price: Decimal = values.get("current_price") or average_price

    cost_basis = quantity * average_price
    total_value = quantity * current_price
    gain_loss = total_value - cost_basis
    gain_loss_percent = (gain_loss / cost_basis * HUNDRED) if cost_basis > ZERO else ZERO

    return {
        **values,
        "current_price": current_price,
        "total_value": total_value,
        "gain_loss": gain_loss,
        "gain_loss_percent": gain_loss_percent,
        "last_updated": datetime.now(timezone.utc),
    }


HEALTH_RECORDS = RecordFamily(
    name="health record",
    model=models.HealthRecord,
    create_schema=schemas.HealthRecordCreate,
    read_schema=schemas.HealthRecordRead,
)
APPOINTMENTS = RecordFamily(
    name="appointment",
    model=models.Appointment,
    create_schema=schemas.AppointmentCreate,
    read_schema=schemas.AppointmentRead,
)
MEDICATIONS = RecordFamily(
    name="medication",
    model=models.Medication,
    create_schema=schemas.MedicationCreate,
    read_schema=schemas.MedicationRead,
    update_schema=schemas.MedicationUpdate,
)
AI_DIAGNOSES = RecordFamily(
    name="AI diagnosis",
    model=models.AiDiagnosis,
    create_schema=schemas.AiDiagnosisCreate,
    read_schema=schemas.AiDiagnosisRead,
)
# Consents and treatment actions name their owner explicitly in the body
PATIENT_CONSENTS = RecordFamily(
    name="patient consent",
    model=models.PatientConsent,
    create_schema=schemas.PatientConsentCreate,
    read_schema=schemas.PatientConsentRead,
    merge_owner=False,
)
TREATMENT_ACTIONS = RecordFamily(
    name="treatment action",
    model=models.TreatmentAction,
    create_schema=schemas.TreatmentActionCreate,
    read_schema=schemas.TreatmentActionRead,
    merge_owner=False,
)

TRANSACTIONS = RecordFamily(
    name="transaction",
    model=models.Transaction,
    create_schema=schemas.TransactionCreate,
    read_schema=schemas.TransactionRead,
)
BUDGETS = RecordFamily(
    name="budget",
    model=models.Budget,
    create_schema=schemas.BudgetCreate,
    read_schema=schemas.BudgetRead,
)
EXPENSES = RecordFamily(
    name="expense",
    model=models.Expense,
    create_schema=schemas.ExpenseCreate,
    read_schema=schemas.ExpenseRead,
)
PORTFOLIO_ITEMS = RecordFamily(
    name="portfolio",
    model=models.PortfolioItem,
    create_schema=schemas.PortfolioItemCreate,
    read_schema=schemas.PortfolioItemRead,
    prepare=value_portfolio_item,
)

TASKS = RecordFamily(
    name="task",
    model=models.Task,
    create_schema=schemas.TaskCreate,
    read_schema=schemas.TaskRead,
    update_schema=schemas.TaskUpdate,
)
GOALS = RecordFamily(
    name="goal",
    model=models.Goal,
    create_schema=schemas.GoalCreate,
    read_schema=schemas.GoalRead,
)
MOOD_LOGS = RecordFamily(
    name="mood log",
    model=models.MoodLog,
    create_schema=schemas.MoodLogCreate,
    read_schema=schemas.MoodLogRead,
)

LEADS = RecordFamily(
    name="lead",
    model=models.Lead,
    create_schema=schemas.LeadCreate,
    read_schema=schemas.LeadRead,
)
INVOICES = RecordFamily(
    name="invoice",
    model=models.Invoice,
    create_schema=schemas.InvoiceCreate,
    read_schema=schemas.InvoiceRead,
)

APPLICATIONS = RecordFamily(
    name="application",
    model=models.Application,
    create_schema=schemas.ApplicationCreate,
    read_schema=schemas.ApplicationRead,
)
DOCUMENTS = RecordFamily(
    name="document",
    model=models.Document,
    create_schema=schemas.DocumentCreate,
    read_schema=schemas.DocumentRead,
)
COMPLAINTS = RecordFamily(
    name="complaint",
    model=models.Complaint,
    create_schema=schemas.ComplaintCreate,
    read_schema=schemas.ComplaintRead,
)

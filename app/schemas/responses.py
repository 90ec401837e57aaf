from pydantic import BaseModel, ConfigDict
from typing import Optional, List, Dict, Any
from datetime import datetime


class CryptoPaymentSummary(BaseModel):
    crypto_amount: str
    crypto_type: str
    network_fee: float


class PaymentResponse(BaseModel):
    success: bool = True
    transaction_id: str
    message: str
    estimated_processing_time: str
    payment_details: Optional[CryptoPaymentSummary] = None  # crypto only


class TransactionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    amount: float
    description: Optional[str] = None
    payment_method: str
    customer_info: Dict[str, Any]
    payment_details: Dict[str, Any]
    status: str
    timestamp: datetime
    processing_fee: float
    net_amount: float
    confirmation_code: Optional[str] = None
    failure_reason: Optional[str] = None
    processed_at: Optional[datetime] = None


class TransactionStatusResponse(BaseModel):
    success: bool = True
    transaction: TransactionOut


class TicketResponseEntry(BaseModel):
    message: str
    timestamp: str
    admin_name: Optional[str] = None


class TicketOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    type: str
    name: str
    email: str
    phone: Optional[str] = None
    company: Optional[str] = None
    project_type: Optional[str] = None
    budget: Optional[str] = None
    timeline: Optional[str] = None
    message: Optional[str] = None
    description: Optional[str] = None
    status: str
    priority: str = "normal"
    timestamp: datetime
    updated_at: Optional[datetime] = None
    responses: List[TicketResponseEntry] = []


class TicketSubmitResponse(BaseModel):
    success: bool = True
    message: str
    ticket_id: str


class Pagination(BaseModel):
    skip: int
    limit: int
    count: int
    total: int


class TransactionList(BaseModel):
    transactions: List[TransactionOut]
    pagination: Pagination


class TicketList(BaseModel):
    tickets: List[TicketOut]
    pagination: Pagination


class TransactionUpdateResponse(BaseModel):
    success: bool = True
    transaction: TransactionOut


class TicketUpdateResponse(BaseModel):
    success: bool = True
    ticket: TicketOut


class AdminDashboard(BaseModel):
    total_transactions: int
    completed_transactions: int
    pending_transactions: int
    failed_transactions: int
    total_tickets: int
    new_tickets: int
    total_revenue: float
    net_revenue: float
    recent_transactions: List[TransactionOut]
    recent_tickets: List[TicketOut]


class ClientStats(BaseModel):
    total_transactions: int
    total_spent: float
    active_tickets: int
    last_payment: Optional[datetime] = None


class ClientDashboard(BaseModel):
    stats: ClientStats
    recent_transactions: List[TransactionOut]
    recent_tickets: List[TicketOut]


class PaymentMethodInfo(BaseModel):
    id: str
    name: str
    fee: str
    processing_time: str
    currencies: List[str]


class PaymentMethodList(BaseModel):
    payment_methods: List[PaymentMethodInfo]


class CompanyInfo(BaseModel):
    name: str
    email: str
    phone: str
    address: str


class ErrorResponse(BaseModel):
    error: str
    detail: Optional[str] = None

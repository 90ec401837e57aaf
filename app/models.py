from sqlalchemy import Column, String, Float, DateTime, JSON
from app.database import Base


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(String, primary_key=True)
    amount = Column(Float, nullable=False)
    description = Column(String, nullable=True)
    payment_method = Column(String, nullable=False, index=True)
    customer_info = Column(JSON, nullable=False, default=dict)  # copy at time of payment
    payment_details = Column(JSON, nullable=False, default=dict)
    status = Column(String, nullable=False, default="processing", index=True)
    timestamp = Column(DateTime, nullable=False, index=True)
    processing_fee = Column(Float, nullable=False, default=0.0)
    net_amount = Column(Float, nullable=False)
    confirmation_code = Column(String, nullable=True)
    failure_reason = Column(String, nullable=True)
    processed_at = Column(DateTime, nullable=True)
    ip_address = Column(String, nullable=True)
    user_agent = Column(String, nullable=True)


class SupportTicket(Base):
    __tablename__ = "support_tickets"

    id = Column(String, primary_key=True)
    type = Column(String, nullable=False, index=True)  # contact | quote
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, index=True)
    phone = Column(String, nullable=True)
    company = Column(String, nullable=True)
    project_type = Column(String, nullable=True)
    budget = Column(String, nullable=True)
    timeline = Column(String, nullable=True)
    message = Column(String, nullable=True)
    description = Column(String, nullable=True)
    status = Column(String, nullable=False, default="new", index=True)
    priority = Column(String, nullable=False, default="normal")
    timestamp = Column(DateTime, nullable=False, index=True)
    updated_at = Column(DateTime, nullable=True)
    responses = Column(JSON, nullable=False, default=list)

from fastapi import APIRouter, Depends, Query

from app.dependencies import get_stores
from app.schemas.responses import ClientDashboard
from app.services.dashboard import build_client_dashboard
from app.stores import Stores

router = APIRouter()


@router.get("/dashboard", response_model=ClientDashboard)
def client_dashboard(email: str = Query(..., min_length=3), stores: Stores = Depends(get_stores)):
    """
    Per-customer summary, matched on the email copied onto each record.
    Payments made under a different email are not included.
    """
    return build_client_dashboard(email, stores.transactions, stores.tickets)

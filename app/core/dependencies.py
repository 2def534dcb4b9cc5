import json
from typing import Any, Dict, Optional

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.clock import make_clock
from app.core.config import settings
from app.core.database import get_db
from app.core.errors import InvalidPayload
from app.core.security import pwd_context
from app.modules.loans.repository import LoanRepository


async def get_json_payload(request: Request) -> Dict[str, Any]:
    """Decode the request body as a JSON object"""
    body = await request.body()
    if not body:
        raise InvalidPayload()
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise InvalidPayload()
    if not isinstance(data, dict):
        raise InvalidPayload()
    return data


async def get_caller_id(x_caller_id: Optional[str] = Header(default=None)) -> Optional[int]:
    """
    Authenticated caller id, when a session layer in front of the API sets it.
    Absent header means the payload's lender_id is the only identity claim.
    """
    if x_caller_id is None:
        return None
    caller_id = x_caller_id.strip()
    if not (caller_id.isascii() and caller_id.isdigit()):
        raise InvalidPayload("Invalid caller ID")
    return int(caller_id)


async def get_repository(db: AsyncSession = Depends(get_db)) -> LoanRepository:
    """Storage gateway bound to the request's session"""
    return LoanRepository(db, password_context=pwd_context)


def get_clock():
    """Clock used to stamp created_at / updated_at"""
    return make_clock(settings.TIMEZONE)

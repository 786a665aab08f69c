from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class TransactionCreate(BaseModel):
    """
    Body of a create request. Missing fields decode to zero values.

    Values are not coerced between types, and non-finite amounts are rejected.
    """
    model_config = ConfigDict(strict=True, allow_inf_nan=False)

    amount: float = 0
    category: str = ''
    description: str = ''
    type: str = ''


class TransactionRecord(BaseModel):
    """
    A stored transaction, as returned to clients.
    """
    model_config = ConfigDict(from_attributes=True)

    id: int
    amount: float
    category: str
    description: Optional[str] = None
    type: str
    created_at: datetime

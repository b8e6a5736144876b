"""
Pydantic models for API request/response documentation.
Auto-generates OpenAPI documentation.
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, Optional


class TransactionsRequest(BaseModel):
    """Body of POST /get-transactions."""
    filters: Dict[str, Any] = Field(
        ...,
        description="TransactionFilterInput forwarded verbatim to Monarch",
        examples=[{"startDate": "2024-01-01", "endDate": "2024-01-31"}],
    )


class ErrorResponse(BaseModel):
    """Error response."""
    error: str
    details: Optional[str] = None

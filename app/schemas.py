"""
View models handed to the document templates.
Each model is built fresh per document and never persisted.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class FundView(BaseModel):
    """A single fund line in the portfolio table."""
    model_config = ConfigDict(from_attributes=True)

    name: str
    amount: float
    fees: float


class LegalEntityView(BaseModel):
    """Legal entity details, shown only for legal-entity applications."""
    model_config = ConfigDict(from_attributes=True)

    name: str
    registration_number: Optional[str] = None
    vat_number: Optional[str] = None


class ReviewView(BaseModel):
    """The application's current review record, passed through as stored."""
    model_config = ConfigDict(from_attributes=True)

    reason: str
    reviewer: Optional[str] = None
    opened_on: Optional[date] = None
    notes: Optional[str] = None


class PendingApplicationViewModel(BaseModel):
    reference_number: str = Field(..., description="Application reference number")
    state: str = Field(..., description="Human-readable state label")
    full_name: str = Field(..., description="Applicant first name and surname")
    applied_on: date = Field(..., description="Submission date")
    support_email: str
    signature: str


class ActivatedApplicationViewModel(PendingApplicationViewModel):
    legal_entity: Optional[LegalEntityView] = Field(
        None, description="Present only when the application is for a legal entity"
    )
    portfolio_funds: List[FundView] = Field(default_factory=list, description="All funds across all products")
    portfolio_total_amount: float = Field(0.0, description="Sum of (amount - fees) * tax rate over all funds")


class InReviewApplicationViewModel(ActivatedApplicationViewModel):
    in_review_message: str
    in_review_information: Optional[ReviewView] = None

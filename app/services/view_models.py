"""
State-driven view model construction.

Maps an application's lifecycle state to the template it is rendered with and
the view model that template expects. Pure: reads the application, the
configuration and the template paths, and returns a fresh view.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Union

from app.config import DocumentConfig
from app.exceptions import ReviewRecordMissing, UnsupportedApplicationState
from app.models import Application, ApplicationState
from app.schemas import (
    ActivatedApplicationViewModel,
    FundView,
    InReviewApplicationViewModel,
    LegalEntityView,
    PendingApplicationViewModel,
    ReviewView,
)
from app.services.portfolio_calculator import flatten_funds, portfolio_total
from app.services.review_messages import in_review_message
from app.services.template_paths import TemplatePathProvider


ApplicationViewModel = Union[
    PendingApplicationViewModel,
    ActivatedApplicationViewModel,
    InReviewApplicationViewModel,
]

TEMPLATE_KEYS: Dict[ApplicationState, str] = {
    ApplicationState.PENDING: "PendingApplication",
    ApplicationState.ACTIVATED: "ActivatedApplication",
    ApplicationState.IN_REVIEW: "InReviewApplication",
}


@dataclass(frozen=True)
class ApplicationView:
    template_key: str
    template_uri: str
    model: ApplicationViewModel


def supports_state(state: ApplicationState) -> bool:
    return state in TEMPLATE_KEYS


def full_name(application: Application) -> str:
    return f"{application.person.first_name} {application.person.surname}"


def _legal_entity(application: Application) -> Optional[LegalEntityView]:
    if not application.is_legal_entity or application.legal_entity is None:
        return None
    return LegalEntityView.model_validate(application.legal_entity)


def _pending_fields(application: Application, config: DocumentConfig) -> dict:
    return {
        "reference_number": application.reference_number,
        "state": application.state.description,
        "full_name": full_name(application),
        "applied_on": application.date,
        "support_email": config.support_email,
        "signature": config.signature,
    }


def _activated_fields(application: Application, config: DocumentConfig) -> dict:
    fields = _pending_fields(application, config)
    fields.update(
        legal_entity=_legal_entity(application),
        portfolio_funds=[FundView.model_validate(f) for f in flatten_funds(application.products)],
        portfolio_total_amount=portfolio_total(application.products, config.tax_rate),
    )
    return fields


def build_view_model(application: Application, config: DocumentConfig) -> ApplicationViewModel:
    state = application.state
    if state is ApplicationState.PENDING:
        return PendingApplicationViewModel(**_pending_fields(application, config))
    if state is ApplicationState.ACTIVATED:
        return ActivatedApplicationViewModel(**_activated_fields(application, config))
    if state is ApplicationState.IN_REVIEW:
        review = application.current_review
        if review is None:
            raise ReviewRecordMissing(application.id)
        return InReviewApplicationViewModel(
            **_activated_fields(application, config),
            in_review_message=in_review_message(review.reason),
            in_review_information=ReviewView.model_validate(review),
        )
    raise UnsupportedApplicationState(state)


def build_application_view(
    application: Application,
    base_uri: str,
    config: DocumentConfig,
    template_paths: TemplatePathProvider,
) -> ApplicationView:
    """
    Build the template view for the application's current state.

    Raises UnsupportedApplicationState for states without a document.
    """
    template_key = TEMPLATE_KEYS.get(application.state)
    if template_key is None:
        raise UnsupportedApplicationState(application.state)

    model = build_view_model(application, config)
    path = template_paths.get(template_key)
    return ApplicationView(template_key=template_key, template_uri=f"{base_uri}{path}", model=model)

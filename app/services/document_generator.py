"""
Application status document generation.

Looks up an application, picks the template and view model for its lifecycle
state, renders the HTML and converts it to PDF bytes.
"""

from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.config import DocumentConfig
from app.exceptions import ApplicationNotFound, UnsupportedApplicationState
from app.models import Application
from app.services.pdf_generator import DEFAULT_PDF_OPTIONS, PDFGenerator, PdfOptions
from app.services.template_paths import TemplatePathProvider
from app.services.view_generator import HtmlViewGenerator
from app.services.view_models import build_application_view, supports_state

logger = logging.getLogger(__name__)


def normalize_base_uri(base_uri: str) -> str:
    """Strip exactly one trailing "/" so template paths can be appended."""
    if base_uri.endswith("/"):
        return base_uri[:-1]
    return base_uri


def is_permitted_base_uri(base_uri: str, config: DocumentConfig) -> bool:
    """True when `base_uri` is, or lies under, one of the configured base URIs."""
    candidate = normalize_base_uri(base_uri)
    if ".." in candidate.split("/"):
        return False
    for allowed in config.permitted_base_uris:
        allowed = normalize_base_uri(allowed)
        if candidate == allowed or candidate.startswith(allowed + "/"):
            return True
    return False


class ApplicationDocumentGenerator:
    """Renders the status document for a single application."""

    def __init__(
        self,
        db: Session,
        config: DocumentConfig,
        template_paths: Optional[TemplatePathProvider] = None,
        view_generator: Optional[HtmlViewGenerator] = None,
        pdf_generator: Optional[PDFGenerator] = None,
        pdf_options: PdfOptions = DEFAULT_PDF_OPTIONS,
    ):
        self.db = db
        self.config = config
        self.template_paths = template_paths or TemplatePathProvider(config.template_paths)
        self.view_generator = view_generator or HtmlViewGenerator(
            timeout=config.template_fetch_timeout, template_root=config.template_root
        )
        self.pdf_generator = pdf_generator or PDFGenerator()
        self.pdf_options = pdf_options

    def generate(self, application_id: UUID, base_uri: str) -> bytes:
        application = self.db.query(Application).filter(Application.id == application_id).first()
        if application is None:
            error = ApplicationNotFound(application_id)
            logger.warning(str(error), extra={"application_id": str(application_id)})
            raise error

        base_uri = normalize_base_uri(base_uri)

        if not supports_state(application.state):
            error = UnsupportedApplicationState(application.state)
            logger.warning(
                str(error),
                extra={"application_id": str(application_id), "state": application.state.value},
            )
            raise error

        view = build_application_view(application, base_uri, self.config, self.template_paths)
        html = self.view_generator.generate_from_path(view.template_uri, view.model)
        pdf = self.pdf_generator.generate_from_html(html, self.pdf_options)
        return pdf.to_bytes()

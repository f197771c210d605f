"""
Errors raised while generating application documents.
"""

from uuid import UUID

from app.models import ApplicationState


class ApplicationDocumentError(Exception):
    """Base class for document generation failures."""


class ApplicationNotFound(ApplicationDocumentError):
    """Raised when no application exists for the requested id."""

    def __init__(self, application_id: UUID):
        self.application_id = application_id
        super().__init__(f"No application found for id '{application_id}'")


class UnsupportedApplicationState(ApplicationDocumentError):
    """Raised when the application's state has no document template."""

    def __init__(self, state: ApplicationState):
        self.state = state
        super().__init__(
            f"The application is in state '{state.description}' and no valid document can be generated for it."
        )


class TemplateNotConfigured(ApplicationDocumentError):
    """Raised when a template key has no configured path."""

    def __init__(self, template_key: str):
        self.template_key = template_key
        super().__init__(f"No template path configured for '{template_key}'")


class TemplateLocationRejected(ApplicationDocumentError):
    """Raised when a template URI points outside the allowed template locations."""

    def __init__(self, template_uri: str, reason: str):
        self.template_uri = template_uri
        self.reason = reason
        super().__init__(f"Template location '{template_uri}' rejected: {reason}")


class ReviewRecordMissing(ApplicationDocumentError):
    """Raised when an application in review has no current review record."""

    def __init__(self, application_id):
        self.application_id = application_id
        super().__init__(f"Application '{application_id}' is in review but has no current review record")

"""
Document generation settings (env-driven, immutable after load).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Tuple


DEFAULT_TEMPLATE_PATHS: Mapping[str, str] = MappingProxyType({
    "PendingApplication": "/pending_application.html",
    "ActivatedApplication": "/activated_application.html",
    "InReviewApplication": "/in_review_application.html",
})


@dataclass(frozen=True)
class DocumentConfig:
    support_email: str = "support@example.com"
    signature: str = "The Applications Team"
    # Applied per fund to (amount - fees).
    tax_rate: float = 1.0
    template_base_uri: str = "./templates"
    # Local templates are only loaded from inside this directory.
    template_root: str = "./templates"
    # Base URIs callers may request besides template_base_uri.
    allowed_base_uris: Tuple[str, ...] = ()
    template_fetch_timeout: float = 10.0
    template_paths: Mapping[str, str] = field(default_factory=lambda: DEFAULT_TEMPLATE_PATHS)

    @property
    def permitted_base_uris(self) -> Tuple[str, ...]:
        return (self.template_base_uri,) + tuple(self.allowed_base_uris)


def load_config() -> DocumentConfig:
    support_email = os.getenv("DOCUMENT_SUPPORT_EMAIL", "support@example.com")
    signature = os.getenv("DOCUMENT_SIGNATURE", "The Applications Team")
    tax_rate = float(os.getenv("DOCUMENT_TAX_RATE", "1.0") or "1.0")
    template_base_uri = os.getenv("DOCUMENT_TEMPLATE_BASE_URI", "./templates")
    template_root = os.getenv("DOCUMENT_TEMPLATE_ROOT", "./templates")
    allowed_base_uris = tuple(
        u.strip() for u in os.getenv("DOCUMENT_ALLOWED_BASE_URIS", "").split(",") if u.strip()
    )
    template_fetch_timeout = float(os.getenv("DOCUMENT_TEMPLATE_FETCH_TIMEOUT", "10") or "10")
    return DocumentConfig(
        support_email=support_email,
        signature=signature,
        tax_rate=tax_rate,
        template_base_uri=template_base_uri,
        template_root=template_root,
        allowed_base_uris=allowed_base_uris,
        template_fetch_timeout=template_fetch_timeout,
    )

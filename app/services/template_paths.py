"""
Template key -> relative template path lookup.
"""

from __future__ import annotations

from typing import Mapping, Optional

from app.config import DEFAULT_TEMPLATE_PATHS
from app.exceptions import TemplateNotConfigured


class TemplatePathProvider:
    """Resolves template keys (e.g. "PendingApplication") to paths relative to the template base URI."""

    def __init__(self, paths: Optional[Mapping[str, str]] = None):
        self.paths = dict(paths if paths is not None else DEFAULT_TEMPLATE_PATHS)

    def get(self, template_key: str) -> str:
        try:
            return self.paths[template_key]
        except KeyError:
            raise TemplateNotConfigured(template_key) from None

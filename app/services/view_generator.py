"""
HTML rendering of view models with Jinja2 templates addressed by URI.

Templates are compiled in a sandboxed environment. Local templates must live
under the configured template root when one is given.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Optional
from urllib.parse import unquote, urlparse

import requests
from jinja2 import FileSystemLoader, select_autoescape
from jinja2.sandbox import SandboxedEnvironment

from app.exceptions import TemplateLocationRejected

logger = logging.getLogger(__name__)


class HtmlViewGenerator:
    """Renders a template located at a URI with a view model."""

    def __init__(
        self,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
        template_root: Optional[str] = None,
    ):
        self.timeout = timeout
        self.session = session or requests.Session()
        self.template_root = os.path.abspath(template_root) if template_root else None
        self._root_env = self._file_environment(self.template_root) if self.template_root else None

    def generate_from_path(self, template_uri: str, model: Any) -> str:
        """
        Render the template at `template_uri` with `model` bound as `model`.

        http(s) URIs are fetched; file:// URIs and plain paths are loaded from
        disk so that includes/extends resolve relative to the template.
        """
        parsed = urlparse(template_uri)
        if parsed.query or parsed.fragment:
            raise TemplateLocationRejected(template_uri, "query strings and fragments are not allowed")

        if parsed.scheme in ("http", "https"):
            template = self._remote_environment().from_string(self._fetch(template_uri))
        elif parsed.scheme in ("file", ""):
            path = unquote(parsed.path) if parsed.scheme == "file" else template_uri
            template = self._load_local(template_uri, os.path.abspath(path))
        else:
            raise TemplateLocationRejected(template_uri, f"unsupported scheme '{parsed.scheme}'")
        return template.render(model=model)

    def close(self):
        self.session.close()

    def _load_local(self, template_uri: str, path: str):
        if self._root_env is None:
            directory, name = os.path.split(path)
            logger.debug("loading template", extra={"template_dir": directory, "template": name})
            return self._file_environment(directory).get_template(name)

        rel = os.path.relpath(path, self.template_root)
        if rel == os.pardir or rel.startswith(os.pardir + os.sep) or os.path.isabs(rel):
            raise TemplateLocationRejected(template_uri, "outside the template root")
        logger.debug("loading template", extra={"template_dir": self.template_root, "template": rel})
        return self._root_env.get_template(rel.replace(os.sep, "/"))

    def _fetch(self, template_uri: str) -> str:
        logger.debug("fetching template", extra={"template_uri": template_uri})
        resp = self.session.get(template_uri, timeout=self.timeout)
        resp.raise_for_status()
        return resp.text

    @staticmethod
    def _file_environment(directory: str) -> SandboxedEnvironment:
        return SandboxedEnvironment(
            loader=FileSystemLoader(directory), autoescape=select_autoescape(["html", "htm"])
        )

    @staticmethod
    def _remote_environment() -> SandboxedEnvironment:
        return SandboxedEnvironment(autoescape=True)

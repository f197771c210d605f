"""
PDF generation service using WeasyPrint.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from typing import Optional


PDF_HEADER_HTML = (
    '<div class="pdf-header-content">'
    "<strong>Application Status</strong>"
    "</div>"
)


class PageNumbers(enum.Enum):
    NONE = "none"
    NUMERIC = "numeric"


class HeaderRepeat(enum.Enum):
    FIRST_PAGE_ONLY = "first_page_only"
    ALL_PAGES = "all_pages"


@dataclass(frozen=True)
class HeaderOptions:
    html: str = PDF_HEADER_HTML
    repeat: HeaderRepeat = HeaderRepeat.FIRST_PAGE_ONLY


@dataclass(frozen=True)
class PdfOptions:
    page_numbers: PageNumbers = PageNumbers.NUMERIC
    header: HeaderOptions = field(default_factory=HeaderOptions)


# Same options for every application document.
DEFAULT_PDF_OPTIONS = PdfOptions()

_BODY_OPEN_RE = re.compile(r"<body[^>]*>", re.IGNORECASE)


@dataclass(frozen=True)
class PdfDocument:
    content: bytes

    def to_bytes(self) -> bytes:
        return self.content


def page_stylesheet(options: PdfOptions) -> str:
    """Build the @page rules for header placement and page numbering."""
    header_page = "@page :first" if options.header.repeat is HeaderRepeat.FIRST_PAGE_ONLY else "@page"
    rules = [
        ".pdf-header { position: running(pdf-header); }",
        f"{header_page} {{ @top-center {{ content: element(pdf-header); }} }}",
    ]
    if options.page_numbers is PageNumbers.NUMERIC:
        rules.append("@page { @bottom-center { content: counter(page); } }")
    return "\n".join(rules)


def inject_header(html: str, header_html: str) -> str:
    """Place the header markup as the first element of <body>."""
    block = f'<div class="pdf-header">{header_html}</div>'
    match = _BODY_OPEN_RE.search(html)
    if not match:
        return block + html
    return html[: match.end()] + block + html[match.end():]


class PDFGenerator:
    """Generates PDF documents from rendered HTML."""

    def __init__(self, base_url: Optional[str] = None):
        # Resolves relative stylesheet/image references in the HTML.
        self.base_url = base_url

    def generate_from_html(self, html: str, options: PdfOptions = DEFAULT_PDF_OPTIONS) -> PdfDocument:
        # Lazy import to avoid loading WeasyPrint until a document is rendered
        from weasyprint import CSS, HTML

        source = inject_header(html, options.header.html)
        content = HTML(string=source, base_url=self.base_url).write_pdf(
            stylesheets=[CSS(string=page_stylesheet(options))]
        )
        return PdfDocument(content=content)

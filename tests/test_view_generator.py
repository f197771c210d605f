from datetime import date
from unittest.mock import MagicMock

import pytest
import requests
from jinja2.exceptions import SecurityError

from app.exceptions import TemplateLocationRejected
from app.schemas import (
    ActivatedApplicationViewModel,
    FundView,
    InReviewApplicationViewModel,
    LegalEntityView,
    PendingApplicationViewModel,
    ReviewView,
)
from app.services.view_generator import HtmlViewGenerator


PENDING = PendingApplicationViewModel(
    reference_number="APP-0042",
    state="Pending",
    full_name="Thandi Nkosi",
    applied_on=date(2025, 3, 14),
    support_email="help@example.org",
    signature="Client Services",
)


def test_renders_bundled_template_from_plain_path(templates_dir):
    html = HtmlViewGenerator().generate_from_path(str(templates_dir / "pending_application.html"), PENDING)
    assert "APP-0042" in html
    assert "Thandi Nkosi" in html
    assert "14 March 2025" in html
    assert "help@example.org" in html


def test_renders_bundled_template_from_file_uri(templates_dir):
    model = ActivatedApplicationViewModel(
        **PENDING.model_dump(),
        legal_entity=LegalEntityView(name="Nkosi & Sons"),
        portfolio_funds=[FundView(name="Equity Growth", amount=100.0, fees=10.0)],
        portfolio_total_amount=18.0,
    )
    html = HtmlViewGenerator().generate_from_path((templates_dir / "activated_application.html").as_uri(), model)
    assert "Equity Growth" in html
    assert "18.00" in html
    # autoescaped
    assert "Nkosi &amp; Sons" in html


def test_in_review_template_shows_message(templates_dir):
    model = InReviewApplicationViewModel(
        **PENDING.model_dump(),
        in_review_message="Your application has been placed in review pending outstanding bank account verification.",
        in_review_information=ReviewView(reason="bank details mismatch", notes="Upload a bank statement."),
    )
    html = HtmlViewGenerator().generate_from_path(str(templates_dir / "in_review_application.html"), model)
    assert "pending outstanding bank account verification." in html
    assert "Upload a bank statement." in html


def test_fetches_remote_template():
    resp = MagicMock()
    resp.text = "<p>{{ model.reference_number }} / {{ model.full_name }}</p>"
    session = MagicMock()
    session.get.return_value = resp

    gen = HtmlViewGenerator(timeout=3, session=session)
    html = gen.generate_from_path("https://docs.example.org/pending_application.html", PENDING)

    assert html == "<p>APP-0042 / Thandi Nkosi</p>"
    session.get.assert_called_once_with("https://docs.example.org/pending_application.html", timeout=3)
    resp.raise_for_status.assert_called_once()


def test_remote_fetch_errors_propagate():
    resp = MagicMock()
    resp.raise_for_status.side_effect = requests.HTTPError("404 Client Error")
    session = MagicMock()
    session.get.return_value = resp

    with pytest.raises(requests.HTTPError):
        HtmlViewGenerator(session=session).generate_from_path("https://docs.example.org/missing.html", PENDING)


def test_remote_templates_are_sandboxed():
    resp = MagicMock()
    resp.text = "{{ cycler.__init__.__globals__.os.popen('echo hacked').read() }}"
    session = MagicMock()
    session.get.return_value = resp

    with pytest.raises(SecurityError):
        HtmlViewGenerator(session=session).generate_from_path("https://docs.example.org/x.html", PENDING)


@pytest.mark.parametrize(
    "suffix",
    ["?/pending_application.html", "#/pending_application.html"],
)
def test_query_and_fragment_are_rejected(tmp_path, suffix):
    secret = tmp_path / "secret.txt"
    secret.write_text("TOP-SECRET")
    with pytest.raises(TemplateLocationRejected):
        HtmlViewGenerator().generate_from_path(secret.as_uri() + suffix, PENDING)


def test_template_root_confines_local_templates(tmp_path, templates_dir):
    secret = tmp_path / "secret.html"
    secret.write_text("TOP-SECRET")
    gen = HtmlViewGenerator(template_root=str(templates_dir))

    with pytest.raises(TemplateLocationRejected):
        gen.generate_from_path(secret.as_uri(), PENDING)
    with pytest.raises(TemplateLocationRejected):
        gen.generate_from_path(str(templates_dir / ".." / "pyproject.toml"), PENDING)

    html = gen.generate_from_path((templates_dir / "pending_application.html").as_uri(), PENDING)
    assert "APP-0042" in html


def test_unsupported_scheme_is_rejected():
    with pytest.raises(TemplateLocationRejected):
        HtmlViewGenerator().generate_from_path("ftp://docs.example.org/pending_application.html", PENDING)


def test_close_closes_session():
    session = MagicMock()
    HtmlViewGenerator(session=session).close()
    session.close.assert_called_once()

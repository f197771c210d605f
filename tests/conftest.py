from datetime import date
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.database import Base
from app.models import (
    Application,
    ApplicationState,
    Fund,
    LegalEntity,
    Person,
    Product,
    Review,
)

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"


@pytest.fixture()
def templates_dir():
    return TEMPLATES_DIR


@pytest.fixture()
def db_session(tmp_path):
    db_path = tmp_path / "test.db"
    engine = create_engine(f"sqlite:///{db_path}", connect_args={"check_same_thread": False})
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(bind=engine)
    session = Session()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


def build_application(
    state=ApplicationState.PENDING,
    reference_number="APP-0001",
    is_legal_entity=False,
    funds=((100.0, 10.0), (50.0, 5.0)),
    review_reason=None,
):
    """Transient Application graph; add it to a session to persist."""
    app = Application(
        reference_number=reference_number,
        state=state,
        date=date(2025, 3, 14),
        person=Person(first_name="Thandi", surname="Nkosi"),
        is_legal_entity=is_legal_entity,
        legal_entity=LegalEntity(name="Nkosi Holdings (Pty) Ltd", registration_number="2019/123456/07"),
        products=[
            Product(
                name="Retirement Annuity",
                funds=[Fund(name=f"Fund {i}", amount=a, fees=f) for i, (a, f) in enumerate(funds, start=1)],
            )
        ],
    )
    if review_reason is not None:
        app.current_review = Review(reason=review_reason, reviewer="Compliance", opened_on=date(2025, 4, 1))
    return app


@pytest.fixture()
def make_application(db_session):
    def _make(**kwargs):
        app = build_application(**kwargs)
        db_session.add(app)
        db_session.commit()
        db_session.refresh(app)
        return app

    return _make

"""
Configuração do pytest e fixtures compartilhadas.
"""

from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from dakarmarket.main import create_app
from dakarmarket.models import db, Product, Profile, Role
from dakarmarket.services.notifications import get_notifier


@pytest.fixture
def app():
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite://",
        "NOTIFY_WEBHOOK_URL": "",
        "LOG_LEVEL": "WARNING",
    })
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def events(app):
    """Eventos publicados durante o teste, em ordem."""
    received = []
    get_notifier().subscribe_all(lambda event, payload: received.append((event, payload)))
    return received


@pytest.fixture
def make_profile(app):
    counter = {"n": 0}

    def _make(role=Role.CLIENT, name=None):
        counter["n"] += 1
        n = counter["n"]
        p = Profile(
            email=f"user{n}@dakarmarket.test",
            display_name=name or f"Usuário {n}",
            role=role.value,
        )
        db.session.add(p)
        db.session.commit()
        return p

    return _make


@pytest.fixture
def client_profile(make_profile):
    return make_profile(Role.CLIENT, "Awa")


@pytest.fixture
def merchant(make_profile):
    return make_profile(Role.MERCHANT, "Boutique Médina")


@pytest.fixture
def make_product(app):
    def _make(owner, price="10.00", title="Boubou brodé", category="mode"):
        p = Product(user_id=owner.id, title=title, price=Decimal(str(price)), category=category)
        db.session.add(p)
        db.session.commit()
        return p

    return _make


@pytest.fixture
def fail_statement(monkeypatch):
    """Faz o banco recusar um tipo de comando (ex.: Delete, Update) com erro operacional."""
    real_execute = Session.execute

    def _fail(statement_type):
        def execute(self, statement, *args, **kwargs):
            if isinstance(statement, statement_type):
                raise OperationalError(str(statement), {}, Exception("database is locked"))
            return real_execute(self, statement, *args, **kwargs)

        monkeypatch.setattr(Session, "execute", execute)

    return _fail


def auth(profile):
    return {"X-User-Id": profile.id}

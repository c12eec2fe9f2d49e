import pytest
from flask_jwt_extended import create_access_token

from backoffice import create_app
from backoffice.extensions import db
from backoffice.application.documents.facade import documents


@pytest.fixture
def app():
    app = create_app("testing")

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def facade(app):
    return documents


def _bearer(identity, role):
    token = create_access_token(identity=identity, additional_claims={"role": role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def editor_headers(app):
    return _bearer("editor-1", "editor")


@pytest.fixture
def admin_headers(app):
    return _bearer("admin-1", "admin")


@pytest.fixture
def viewer_headers(app):
    return _bearer("viewer-1", "student")


@pytest.fixture
def policy(facade):
    """A freshly created document at version 1.0."""
    return facade.create("Policy A", "v1 text", "user-1")

import pytest
import uuid

from config import TestConfig
from linkhub import create_app
from linkhub.database import create_all, drop_all, get_session
from linkhub.models import Project, User, ProjectUsers, Folder, Program, Partner, Discount, ProgramEnrollment
from linkhub.services import edge_config as edge_config_module
from linkhub.services.storage_service import parse_data_uri


PUBLIC_URL_PREFIX = f"{TestConfig.S3_PUBLIC_URL}/{TestConfig.S3_BUCKET}/"

# 1x1 transparent PNG
PNG_DATA_URI = (
    'data:image/png;base64,'
    'iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=='
)


class FakeStorage:
    """In-memory object storage recording uploads and deletions."""

    def __init__(self):
        self.objects = {}
        self.uploaded = []
        self.deleted = []

    def upload(self, key, body, content_type=None):
        data, detected_type = parse_data_uri(body) if isinstance(body, str) else (body, content_type)
        self.objects[key] = (data, content_type or detected_type)
        self.uploaded.append(key)
        return {'url': self.get_public_url(key), 'key': key}

    def delete(self, key):
        self.objects.pop(key, None)
        self.deleted.append(key)
        return True

    def get_public_url(self, key):
        return f"{PUBLIC_URL_PREFIX}{key}"

    def key_from_url(self, url):
        if url and url.startswith(PUBLIC_URL_PREFIX):
            return url[len(PUBLIC_URL_PREFIX):]
        return None


class FakeEdgeConfig:
    """Edge config store backed by a dict."""

    def __init__(self, documents=None):
        self.documents = dict(documents or {})

    def is_available(self):
        return True

    def get(self, key, default=None):
        return self.documents.get(key, default)

    def set(self, key, value):
        self.documents[key] = value
        return True


@pytest.fixture(scope='function')
def app():
    """Create application instance with a fresh in-memory database."""
    app = create_app(TestConfig)
    # Fixture objects must stay readable once a request tears the session down
    get_session().configure(expire_on_commit=False)
    create_all()
    yield app
    app.extensions['background_tasks'].shutdown()
    get_session().remove()
    drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def session(app):
    """Database session for testing."""
    session = get_session()
    yield session
    session.rollback()
    session.close()


@pytest.fixture(autouse=True)
def storage(monkeypatch):
    """Replace object storage with an in-memory fake."""
    fake = FakeStorage()
    monkeypatch.setattr('linkhub.services.workspace_service.get_storage_service', lambda: fake)
    return fake


@pytest.fixture
def edge_config(app, monkeypatch):
    """Reachable edge config store; tests fill in its documents."""
    fake = FakeEdgeConfig()
    monkeypatch.setattr(edge_config_module, '_edge_config', fake)
    return fake


@pytest.fixture
def make_workspace(session):
    def _make_workspace(**kwargs):
        suffix = str(uuid.uuid4())[:8]
        workspace = Project(
            name=kwargs.pop('name', f'Acme {suffix}'),
            slug=kwargs.pop('slug', f'acme-{suffix}'),
            **kwargs
        )
        session.add(workspace)
        session.commit()
        return workspace
    return _make_workspace


@pytest.fixture
def make_user(session):
    def _make_user(**kwargs):
        suffix = str(uuid.uuid4())[:8]
        user = User(
            name=kwargs.pop('name', 'Test User'),
            email=kwargs.pop('email', f'user-{suffix}@test.com'),
            **kwargs
        )
        session.add(user)
        session.commit()
        return user
    return _make_user


@pytest.fixture
def add_member(session):
    def _add_member(user, workspace, role='member'):
        membership = ProjectUsers(user_id=user.id, project_id=workspace.id, role=role)
        session.add(membership)
        session.commit()
        return membership
    return _add_member


@pytest.fixture(scope='function')
def workspace(make_workspace):
    """Business-plan workspace."""
    return make_workspace(plan='business')


@pytest.fixture(scope='function')
def owner(make_user, add_member, workspace):
    """Owner of the workspace."""
    user = make_user(name='Owner')
    add_member(user, workspace, role='owner')
    return user


@pytest.fixture(scope='function')
def member(make_user, add_member, workspace):
    """Plain member of the workspace."""
    user = make_user(name='Member')
    add_member(user, workspace, role='member')
    return user


@pytest.fixture
def login(client):
    def _login(user_id):
        with client.session_transaction() as sess:
            sess['user_id'] = user_id
        return client
    return _login


@pytest.fixture(scope='function')
def authenticated_client(login, owner):
    """Client logged in as the workspace owner."""
    return login(owner.id)


@pytest.fixture
def make_folder(session):
    def _make_folder(workspace, access_level=None, name='Marketing'):
        folder = Folder(name=name, project_id=workspace.id, access_level=access_level)
        session.add(folder)
        session.commit()
        return folder
    return _make_folder


@pytest.fixture
def program(session, workspace):
    """Partner program of the workspace."""
    program = Program(workspace_id=workspace.id, name='Acme Partners')
    session.add(program)
    session.commit()
    return program


@pytest.fixture
def make_partner(session):
    def _make_partner(program, name, email=None, image=None, discount=None):
        partner = Partner(name=name, email=email, image=image)
        session.add(partner)
        session.flush()
        session.add(ProgramEnrollment(
            partner_id=partner.id,
            program_id=program.id,
            discount_id=discount.id if discount else None,
        ))
        session.commit()
        return partner
    return _make_partner


@pytest.fixture
def discount(session, program):
    discount = Discount(program_id=program.id, amount=20, type='percentage')
    session.add(discount)
    session.commit()
    return discount

"""
Infraestructura de pruebas
==========================
  - Firestore en memoria (FakeFirestore) con la parte del API que usa la app
  - Envio FCM simulado (FakeSender) con errores configurables por token
  - Cliente de Gemini simulado (FakeAIClient)
  - TestClient de FastAPI con usuarios admin / auditor / sin rol
"""

import base64
import io
import itertools
import os
import sys
from types import SimpleNamespace

import pytest
from PIL import Image

ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, ROOT_DIR)


# ============================================================================
# Firestore en memoria
# ============================================================================

class FakeSnapshot:
    def __init__(self, reference, data):
        self.reference = reference
        self.id = reference.id
        self._data = data

    @property
    def exists(self):
        return self._data is not None

    def to_dict(self):
        return dict(self._data) if self._data is not None else None


class FakeDocumentReference:
    def __init__(self, db, collection_name, doc_id):
        self._db = db
        self._collection_name = collection_name
        self.id = doc_id

    def get(self):
        return FakeSnapshot(self, self._db.data[self._collection_name].get(self.id))

    def set(self, data):
        self._db.data[self._collection_name][self.id] = dict(data)

    def delete(self):
        # Igual que Firestore: borrar un documento inexistente no falla
        self._db.deleted.append((self._collection_name, self.id))
        self._db.data[self._collection_name].pop(self.id, None)


class FakeQuery:
    def __init__(self, db, collection_name, filters=(), order=None):
        self._db = db
        self._collection_name = collection_name
        self._filters = tuple(filters)
        self._order = order

    def where(self, filter):
        return FakeQuery(self._db, self._collection_name, self._filters + (filter,), self._order)

    def order_by(self, field_path, direction="ASCENDING"):
        return FakeQuery(self._db, self._collection_name, self._filters, (field_path, direction))

    def stream(self):
        documents = list(self._db.data[self._collection_name].items())
        for field_filter in self._filters:
            documents = [
                (doc_id, data) for doc_id, data in documents
                if _matches(data.get(field_filter.field_path), field_filter.op_string, field_filter.value)
            ]
        if self._order is not None:
            field_path, direction = self._order
            documents.sort(key=lambda item: item[1].get(field_path), reverse=str(direction).upper().startswith("DESC"))
        for doc_id, data in documents:
            reference = FakeDocumentReference(self._db, self._collection_name, doc_id)
            yield FakeSnapshot(reference, dict(data))


def _matches(value, op, expected):
    if value is None:
        return False
    return {
        "==": value == expected,
        ">=": value >= expected,
        "<=": value <= expected,
        ">": value > expected,
        "<": value < expected,
    }[op]


class FakeCollection(FakeQuery):
    def document(self, doc_id):
        return FakeDocumentReference(self._db, self._collection_name, doc_id)

    def add(self, data):
        doc_id = f"doc-{next(self._db.ids)}"
        self._db.data[self._collection_name][doc_id] = dict(data)
        return None, FakeDocumentReference(self._db, self._collection_name, doc_id)


class FakeFirestore:
    def __init__(self):
        self.data = {}
        self.deleted = []
        self.ids = itertools.count(1)

    def collection(self, name):
        self.data.setdefault(name, {})
        return FakeCollection(self, name)

    def seed(self, name, documents):
        ids = []
        for document in documents:
            _, reference = self.collection(name).add(document)
            ids.append(reference.id)
        return ids


# ============================================================================
# FCM y Gemini simulados
# ============================================================================

class FakeSender:
    """Sustituye a messaging.send_each_for_multicast."""

    def __init__(self, errors=None, raise_error=None):
        self.errors = errors or {}
        self.raise_error = raise_error
        self.messages = []

    def __call__(self, message):
        if self.raise_error is not None:
            raise self.raise_error
        self.messages.append(message)
        responses = []
        for token in message.tokens:
            error = self.errors.get(token)
            responses.append(SimpleNamespace(success=error is None, exception=error, message_id=None if error else f"msg-{token}"))
        failures = sum(1 for r in responses if not r.success)
        return SimpleNamespace(responses=responses, success_count=len(responses) - failures, failure_count=failures)

    @property
    def sent_tokens(self):
        return [token for message in self.messages for token in message.tokens]


class FakeAIClient:
    def __init__(self, results=None, error=None):
        self.results = results or {}
        self.error = error
        self.calls = []

    async def generate_json(self, prompt, schema):
        self.calls.append((schema.__name__, prompt))
        if self.error is not None:
            raise self.error
        return schema.model_validate(self.results[schema.__name__])


TREND_RESULT = {
    "most_frequent_areas": [{"area": "Taller", "count": 2}],
    "most_frequent_risk_types": [{"risk_type": "Piso resbaladizo", "count": 2}],
    "risk_summary": "Los resbalones en el taller son el riesgo dominante.",
}

FORECAST_RESULT = {
    "predicted_incidents": "Caídas al mismo nivel en el taller.",
    "reasoning": "Dos hallazgos de piso resbaladizo en el mismo mes.",
    "preventative_actions": "Instalar piso antideslizante y señalizar.",
}


# ============================================================================
# Imagenes
# ============================================================================

def make_image_bytes(fmt="PNG", size=(640, 480), mode="RGB", color=(200, 30, 30)):
    buffer = io.BytesIO()
    if mode == "RGBA" and len(color) == 3:
        color = color + (128,)
    Image.new(mode, size, color).save(buffer, format=fmt)
    return buffer.getvalue()


def decode_data_uri(data_uri):
    header, payload = data_uri.split(",", 1)
    mime = header[len("data:"):].split(";")[0]
    return mime, Image.open(io.BytesIO(base64.b64decode(payload)))


def inspection_payload(**overrides):
    payload = {
        "area": "Taller",
        "auditor": "Ana Pérez",
        "observed_at": "2024-05-10",
        "risk_type": "Piso resbaladizo",
        "potential": "High",
        "description": "Aceite derramado junto al torno.",
        "corrective_action": "Limpiar y colocar bandeja de contención.",
        "responsible": "Jefe de taller",
        "deadline": "2024-05-12",
        "status": "InProgress",
        "photos": [],
    }
    payload.update(overrides)
    return payload


# ============================================================================
# Fixtures
# ============================================================================

ADMIN_USER = {"uid": "admin-uid", "email": "admin@worksafe.com", "role": "admin"}
AUDITOR_USER = {"uid": "auditor-uid", "email": "auditor@worksafe.com", "role": "auditor"}
NO_ROLE_USER = {"uid": "guest-uid", "email": "guest@worksafe.com", "role": None}


@pytest.fixture
def db():
    return FakeFirestore()


@pytest.fixture
def sender():
    return FakeSender()


@pytest.fixture
def ai_client():
    return FakeAIClient({"TrendAnalysis": TREND_RESULT, "RiskForecast": FORECAST_RESULT})


@pytest.fixture
def app(db, sender, ai_client):
    from app.ai.gemini_client import get_ai_client
    from app.config.database import get_db
    from app.main import app as fastapi_app
    from app.notifications import get_push_sender
    from app.routes.dashboard import analysis_cache

    fastapi_app.dependency_overrides[get_db] = lambda: db
    fastapi_app.dependency_overrides[get_push_sender] = lambda: sender
    fastapi_app.dependency_overrides[get_ai_client] = lambda: ai_client
    analysis_cache.clear()
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()
    analysis_cache.clear()


@pytest.fixture
def make_client(app):
    from fastapi.testclient import TestClient
    from app.dependencies.auth import get_current_user

    def _make(user):
        if user is None:
            app.dependency_overrides.pop(get_current_user, None)
        else:
            app.dependency_overrides[get_current_user] = lambda: user
        return TestClient(app)

    return _make


@pytest.fixture
def admin_client(make_client):
    return make_client(ADMIN_USER)


@pytest.fixture
def auditor_client(make_client):
    return make_client(AUDITOR_USER)

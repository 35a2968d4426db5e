"""
Fixtures compartidas para todos los tests.
Usa scopes optimizados y fixtures anidadas según las reglas.
"""
import pytest
import os
from typing import Generator, Dict
from unittest.mock import Mock

import requests

from ufastly.config import FastlyConfig
from ufastly.content import Content, ContentRepository, CACHE_CONTROL_PROPERTY
from ufastly.purge import FastlyClient


ENV_VARS = [
    'BACKEND_HOST', 'BACKEND_PORT', 'FLASK_DEBUG', 'APP_VERSION', 'LOG_LEVEL',
    'FASTLY_SERVICE_ID', 'FASTLY_APPLICATION_ID', 'FASTLY_API_KEY', 'FASTLY_API_URL',
    'FASTLY_MAX_AGE', 'FASTLY_STALE_WHILE_REVALIDATE', 'FASTLY_PURGE_ALL_ON_PUBLISH',
    'FASTLY_PURGE_BLOCKING', 'FASTLY_DISABLE_ARR_AFFINITY',
]


@pytest.fixture
def clean_env(monkeypatch) -> Generator[None, None, None]:
    """
    Limpia variables de entorno antes de cada test.
    Scope: function (se ejecuta para cada test).
    """
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)

    yield


@pytest.fixture
def mock_env(monkeypatch, clean_env) -> Dict[str, str]:
    """Configuración de entorno mock para tests"""
    env_config = {
        'BACKEND_HOST': '127.0.0.1',
        'BACKEND_PORT': '8080',
        'FLASK_DEBUG': 'false',
        'APP_VERSION': 'test-1.0.0',
        'LOG_LEVEL': 'DEBUG',
        'FASTLY_SERVICE_ID': 'abc123',
        'FASTLY_API_KEY': 'secret-key',
        'FASTLY_MAX_AGE': '300',
        'FASTLY_STALE_WHILE_REVALIDATE': '60',
        'FASTLY_PURGE_ALL_ON_PUBLISH': 'true',
    }

    for key, value in env_config.items():
        monkeypatch.setenv(key, value)

    return env_config


@pytest.fixture
def fastly_config() -> FastlyConfig:
    """Configuración de Fastly con caché y purga habilitadas"""
    return FastlyConfig(
        service_id='abc123',
        api_key='secret-key',
        max_age=300,
        stale_while_revalidate=60,
        purge_all_on_publish=True,
    )


@pytest.fixture
def mock_session() -> Mock:
    """Session de requests sin red: responde 200 a todo"""
    session = Mock(spec=requests.Session)
    session.headers = {}
    response = Mock(spec=requests.Response)
    response.ok = True
    response.status_code = 200
    session.request.return_value = response
    return session


@pytest.fixture
def fastly_client(mock_session) -> FastlyClient:
    """FastlyClient con session mock (anidada: depende de mock_session)"""
    return FastlyClient('secret-key', session=mock_session)


@pytest.fixture
def repository() -> ContentRepository:
    """Repositorio con contenido de muestra"""
    return ContentRepository([
        Content(slug='home', title='Home', body='Bienvenido', published=True),
        Content(slug='news', title='News', published=True,
                properties={CACHE_CONTROL_PROPERTY: 30}),
        Content(slug='live', title='Live', published=True,
                properties={CACHE_CONTROL_PROPERTY: 0}),
        Content(slug='draft', title='Draft', published=False),
    ])


@pytest.fixture
def flask_app(fastly_config, fastly_client, repository, clean_env):
    """
    Crea una instancia de Flask app para tests.
    Scope: function (nueva instancia por test).
    """
    from ufastly.app import create_app

    app = create_app(
        {'TESTING': True, 'PORT': 8080, 'DEBUG': False},
        fastly_config=fastly_config,
        purge_client=fastly_client,
        repository=repository,
    )

    return app


@pytest.fixture
def flask_client(flask_app):
    """Cliente de test de Flask (anidada: depende de flask_app)"""
    return flask_app.test_client()


@pytest.fixture(autouse=True)
def reset_singletons():
    """
    Fixture autouse para resetear singletons entre tests.
    Scope: function (se ejecuta automáticamente para cada test).
    """
    from ufastly.config import config
    config._app = None
    config._fastly = None

    yield

    config._app = None
    config._fastly = None

"""
uFastly - Integración de caché con Fastly

Headers de caché por contenido y purga del CDN al publicar.

Componentes principales:
- cache_policy: resolución de Cache-Control / Expires
- purge: cliente de la API de Fastly y notificador de purga
- integration: extensión Flask que conecta ambos a las señales
- app: servicio de contenido de referencia
- config: Configuración 12-Factor
"""

__version__ = "1.0.0"

from ufastly.app import create_app
from ufastly.cache_policy import CacheDirective, Cacheability, resolve_cache_directive, apply_cache_directive
from ufastly.config import config, ConfigFacade, FastlyConfig
from ufastly.content import Content, ContentRepository
from ufastly.integration import FastlyCache
from ufastly.purge import FastlyClient, PurgeNotifier, PurgeRequest, PurgeOutcome, build_purge_request

__all__ = [
    "create_app",
    "CacheDirective",
    "Cacheability",
    "resolve_cache_directive",
    "apply_cache_directive",
    "config",
    "ConfigFacade",
    "FastlyConfig",
    "Content",
    "ContentRepository",
    "FastlyCache",
    "FastlyClient",
    "PurgeNotifier",
    "PurgeRequest",
    "PurgeOutcome",
    "build_purge_request",
]

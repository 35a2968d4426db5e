"""
Configuración 12-Factor: toda la config viene de variables de entorno.
Implementa patrón Facade para acceso centralizado a configuración.

Los valores de Fastly se parsean una sola vez con semántica "safe-parse":
un valor ausente o inválido desactiva la funcionalidad, nunca es un error.
"""
import os
from typing import Optional, Dict, Any
from dataclasses import dataclass

DEFAULT_FASTLY_API_URL = "https://api.fastly.com/"

_TRUE_VALUES = ('true', '1', 'yes', 'on')
_FALSE_VALUES = ('false', '0', 'no', 'off')


def parse_int(value: Optional[str], default: int = 0) -> int:
    """Convierte a entero; si falla retorna el default"""
    if value is None:
        return default
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return default


def parse_bool(value: Optional[str], default: bool = False) -> bool:
    """Convierte a booleano; valores desconocidos retornan el default"""
    if value is None:
        return default
    normalized = str(value).strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    return default


@dataclass
class AppConfig:
    """Configuración de la aplicación"""
    host: str = "0.0.0.0"
    port: int = 8080
    debug: bool = False
    version: str = "1.0.0"
    log_level: str = "INFO"


@dataclass
class FastlyConfig:
    """Configuración de la integración con Fastly"""
    service_id: str = ""
    api_key: str = ""
    api_url: str = DEFAULT_FASTLY_API_URL
    max_age: int = 0
    stale_while_revalidate: int = 0
    purge_all_on_publish: bool = False
    purge_blocking: bool = True
    disable_arr_affinity: bool = False


class ConfigFacade:
    """
    Facade para acceso unificado a toda la configuración.
    Implementa 12-Factor: configuración por variables de entorno.
    """

    def __init__(self):
        self._app: Optional[AppConfig] = None
        self._fastly: Optional[FastlyConfig] = None

    @property
    def app(self) -> AppConfig:
        """Configuración de la aplicación"""
        if self._app is None:
            self._app = AppConfig(
                host=os.getenv('BACKEND_HOST', '0.0.0.0'),
                port=parse_int(os.getenv('BACKEND_PORT'), 8080),
                debug=parse_bool(os.getenv('FLASK_DEBUG')),
                version=os.getenv('APP_VERSION', '1.0.0'),
                log_level=os.getenv('LOG_LEVEL', 'INFO'),
            )
        return self._app

    @property
    def fastly(self) -> FastlyConfig:
        """Configuración de Fastly (se parsea una sola vez)"""
        if self._fastly is None:
            service_id = os.getenv('FASTLY_SERVICE_ID') or os.getenv('FASTLY_APPLICATION_ID', '')
            self._fastly = FastlyConfig(
                service_id=service_id.strip(),
                api_key=os.getenv('FASTLY_API_KEY', '').strip(),
                api_url=os.getenv('FASTLY_API_URL') or DEFAULT_FASTLY_API_URL,
                max_age=parse_int(os.getenv('FASTLY_MAX_AGE')),
                stale_while_revalidate=parse_int(os.getenv('FASTLY_STALE_WHILE_REVALIDATE')),
                purge_all_on_publish=parse_bool(os.getenv('FASTLY_PURGE_ALL_ON_PUBLISH')),
                purge_blocking=parse_bool(os.getenv('FASTLY_PURGE_BLOCKING'), True),
                disable_arr_affinity=parse_bool(os.getenv('FASTLY_DISABLE_ARR_AFFINITY')),
            )
        return self._fastly

    def to_dict(self) -> Dict[str, Any]:
        """Exporta toda la configuración como diccionario (API key enmascarada)"""
        return {
            'app': {
                'host': self.app.host,
                'port': self.app.port,
                'debug': self.app.debug,
                'version': self.app.version,
                'log_level': self.app.log_level,
            },
            'fastly': {
                'service_id': self.fastly.service_id,
                'api_key': '***' if self.fastly.api_key else '',
                'api_url': self.fastly.api_url,
                'max_age': self.fastly.max_age,
                'stale_while_revalidate': self.fastly.stale_while_revalidate,
                'purge_all_on_publish': self.fastly.purge_all_on_publish,
                'purge_blocking': self.fastly.purge_blocking,
                'disable_arr_affinity': self.fastly.disable_arr_affinity,
            },
        }

    def validate(self) -> bool:
        """
        Valida la configuración de la aplicación.
        Los valores de Fastly nunca son fatales: inválido equivale a desactivado.
        """
        errors = []

        if not (1 <= self.app.port <= 65535):
            errors.append(f"Invalid app port: {self.app.port}")

        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if self.app.log_level.upper() not in valid_levels:
            errors.append(f"Invalid log level: {self.app.log_level}")

        if errors:
            raise ValueError(f"Configuration errors: {', '.join(errors)}")

        return True


# Instancia global del facade (singleton)
config = ConfigFacade()

"""
Purga completa de la caché de Fastly.

La purga es best-effort y at-most-once: los errores se registran en el log
pero nunca se propagan al flujo de publicación.
"""
import logging
import threading
from typing import Optional
from dataclasses import dataclass
from urllib.parse import quote, urljoin

import requests

from ufastly.config import DEFAULT_FASTLY_API_URL

logger = logging.getLogger(__name__)


@dataclass
class PurgeRequest:
    """Request de purge_all para un servicio"""
    service_id: str
    method: str = "POST"

    @property
    def path(self) -> str:
        return f"service/{quote(self.service_id, safe='')}/purge_all"


@dataclass
class PurgeOutcome:
    """Resultado de una purga (no se reintenta ni se correlaciona)"""
    service_id: str
    ok: bool
    status_code: Optional[int] = None
    error: Optional[str] = None


def build_purge_request(service_id: str) -> PurgeRequest:
    return PurgeRequest(service_id=service_id)


class FastlyClient:
    """Cliente HTTP de la API de Fastly con autenticación por API key"""

    def __init__(self, api_key: str, base_url: str = DEFAULT_FASTLY_API_URL,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url if base_url.endswith('/') else base_url + '/'
        self.session = session or requests.Session()
        self.session.headers.update({
            'Accept': 'application/json',
            'Fastly-Key': api_key,
        })

    def url_for(self, purge_request: PurgeRequest) -> str:
        return urljoin(self.base_url, purge_request.path)

    def send(self, purge_request: PurgeRequest) -> requests.Response:
        """Envía el request con body vacío; usa el timeout por defecto de requests"""
        return self.session.request(
            purge_request.method,
            self.url_for(purge_request),
            data=b'',
        )

    def close(self) -> None:
        self.session.close()


class PurgeNotifier:
    """
    Dispara purge_all cuando se publica contenido.
    En modo no bloqueante la purga corre en un thread daemon.
    """

    def __init__(self, client: FastlyClient, service_id: str, blocking: bool = True):
        self.client = client
        self.service_id = service_id
        self.blocking = blocking

    def purge_all(self) -> PurgeOutcome:
        if not self.service_id:
            logger.warning("PURGE_SKIPPED reason=missing-service-id")
            return PurgeOutcome(service_id='', ok=False, error='missing service id')

        purge_request = build_purge_request(self.service_id)
        logger.info(f"PURGE_ALL service={self.service_id}")

        try:
            response = self.client.send(purge_request)
        except requests.RequestException as e:
            logger.error(f"Purge failed for service {self.service_id}: {e}")
            return PurgeOutcome(service_id=self.service_id, ok=False, error=str(e))
        except Exception as e:
            logger.exception(f"Unexpected purge error for service {self.service_id}")
            return PurgeOutcome(service_id=self.service_id, ok=False, error=str(e))

        if not response.ok:
            logger.warning(
                "PURGE_REJECTED",
                extra={
                    'service_id': self.service_id,
                    'status': response.status_code,
                }
            )

        return PurgeOutcome(
            service_id=self.service_id,
            ok=response.ok,
            status_code=response.status_code,
        )

    def notify(self, sender, **extra) -> Optional[PurgeOutcome]:
        """Receiver de la señal content_published"""
        content = extra.get('content')
        logger.info(f"CONTENT_PUBLISHED slug={getattr(content, 'slug', None)}")

        if self.blocking:
            return self.purge_all()

        worker = threading.Thread(target=self.purge_all, name='fastly-purge', daemon=True)
        worker.start()
        return None

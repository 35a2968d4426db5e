"""
Adaptador Flask: conecta el resolver de caché y el notificador de purga
a las señales del pipeline de publicación.
"""
import logging
from typing import Optional

from flask import Flask

from ufastly.cache_policy import apply_arr_affinity, apply_cache_directive, resolve_cache_directive
from ufastly.config import FastlyConfig, config
from ufastly.content import cache_override
from ufastly.events import content_published, request_prepared
from ufastly.purge import FastlyClient, PurgeNotifier

logger = logging.getLogger(__name__)


class FastlyCache:
    """Extensión Flask para la integración con Fastly"""

    def __init__(self, app: Optional[Flask] = None, fastly_config: Optional[FastlyConfig] = None,
                 client: Optional[FastlyClient] = None):
        self.fastly_config = fastly_config
        self.client = client
        self.notifier: Optional[PurgeNotifier] = None
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        if self.fastly_config is None:
            self.fastly_config = config.fastly

        # Los receivers se conectan con referencia débil: la extensión vive en app.extensions
        app.extensions['ufastly'] = self
        request_prepared.connect(self.on_request_prepared, sender=app)

        if self.fastly_config.purge_all_on_publish:
            if self.client is None:
                self.client = FastlyClient(self.fastly_config.api_key, self.fastly_config.api_url)
            self.notifier = PurgeNotifier(
                self.client,
                self.fastly_config.service_id,
                blocking=self.fastly_config.purge_blocking,
            )
            content_published.connect(self.notifier.notify, sender=app)
            logger.info(f"Purge on publish enabled for service {self.fastly_config.service_id}")

    def on_request_prepared(self, sender, content=None, response=None, **extra) -> None:
        """Aplica los headers de caché a la respuesta del contenido resuelto"""
        if response is None:
            return
        if content is None or not content.published:
            return

        directive = resolve_cache_directive(
            self.fastly_config.max_age,
            override=cache_override(content),
            stale_while_revalidate=self.fastly_config.stale_while_revalidate,
        )
        if directive is None:
            return

        apply_cache_directive(response, directive)
        apply_arr_affinity(response, self.fastly_config.disable_arr_affinity)

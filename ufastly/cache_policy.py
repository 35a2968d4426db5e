"""
Resolución de la política de caché para respuestas de contenido.

El max-age efectivo sale del override del contenido (si existe) o del
default del sistema. Con max-age <= 0 no se emite ninguna directiva.
"""
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional
from dataclasses import dataclass

from werkzeug.http import http_date

ARR_AFFINITY_HEADER = "Arr-Disable-Session-Affinity"


class Cacheability(str, Enum):
    PUBLIC = "public"


@dataclass
class CacheDirective:
    """Directiva de caché que se envía al CDN"""
    max_age: int
    expires: datetime
    stale_while_revalidate: Optional[int] = None
    cacheability: Cacheability = Cacheability.PUBLIC

    def to_header(self) -> str:
        """Convierte la directiva a header Cache-Control"""
        parts = [self.cacheability.value, f"max-age={self.max_age}"]

        # https://docs.fastly.com/guides/performance-tuning/serving-stale-content
        if self.stale_while_revalidate:
            parts.append(f"stale-while-revalidate={self.stale_while_revalidate}")

        return ", ".join(parts)


def resolve_cache_directive(
    default_max_age: int,
    override: Optional[int] = None,
    stale_while_revalidate: int = 0,
    now: Optional[datetime] = None,
) -> Optional[CacheDirective]:
    """
    Calcula la directiva de caché.

    Un override presente (incluso 0 o negativo) reemplaza por completo al
    default. Retorna None cuando el max-age efectivo es <= 0.
    """
    max_age = override if override is not None else default_max_age
    if max_age <= 0:
        return None

    now = now or datetime.now(timezone.utc)
    swr = stale_while_revalidate if stale_while_revalidate > 0 else None

    return CacheDirective(
        max_age=max_age,
        expires=now + timedelta(seconds=max_age),
        stale_while_revalidate=swr,
    )


def apply_cache_directive(response, directive: Optional[CacheDirective]) -> None:
    """Escribe Cache-Control y Expires en la respuesta"""
    if response is None or directive is None:
        return

    response.headers['Cache-Control'] = directive.to_header()
    response.headers['Expires'] = http_date(directive.expires)


def apply_arr_affinity(response, enabled: bool) -> None:
    """
    Desactiva el Set-Cookie ARRAffinity de Azure, que provoca cache MISS.
    Solo se aplica cuando el flag es verdadero.
    """
    if response is None or not enabled:
        return

    response.headers[ARR_AFFINITY_HEADER] = "True"

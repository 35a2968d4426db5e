"""
Modelo mínimo de contenido publicado y repositorio en memoria.
"""
import threading
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field

from ufastly.config import parse_int

CACHE_CONTROL_PROPERTY = "cacheControlMaxAge"


@dataclass
class Content:
    """Item de contenido con propiedades arbitrarias"""
    slug: str
    title: str = ""
    body: str = ""
    published: bool = False
    properties: Dict[str, Any] = field(default_factory=dict)

    def has_property(self, name: str) -> bool:
        return name in self.properties

    def has_value(self, name: str) -> bool:
        """La propiedad existe y tiene un valor no vacío"""
        value = self.properties.get(name)
        if value is None:
            return False
        if isinstance(value, str) and not value.strip():
            return False
        return True

    def get_int(self, name: str) -> int:
        return parse_int(self.properties.get(name))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'slug': self.slug,
            'title': self.title,
            'body': self.body,
            'published': self.published,
            'properties': dict(self.properties),
        }


def cache_override(content: Optional[Content]) -> Optional[int]:
    """Override de max-age definido en el contenido, o None"""
    if content is None:
        return None
    if content.has_property(CACHE_CONTROL_PROPERTY) and content.has_value(CACHE_CONTROL_PROPERTY):
        return content.get_int(CACHE_CONTROL_PROPERTY)
    return None


class ContentRepository:
    """Repositorio en memoria indexado por slug"""

    def __init__(self, items: Optional[List[Content]] = None):
        self._items: Dict[str, Content] = {}
        self._lock = threading.Lock()
        for item in items or []:
            self.add(item)

    def add(self, content: Content) -> Content:
        with self._lock:
            self._items[content.slug] = content
        return content

    def get(self, slug: str) -> Optional[Content]:
        with self._lock:
            return self._items.get(slug)

    def all(self) -> List[Content]:
        with self._lock:
            return list(self._items.values())

    def publish(self, slug: str) -> Optional[Content]:
        """Marca el contenido como publicado; el evento lo emite la capa web"""
        return self._set_published(slug, True)

    def unpublish(self, slug: str) -> Optional[Content]:
        return self._set_published(slug, False)

    def _set_published(self, slug: str, published: bool) -> Optional[Content]:
        with self._lock:
            content = self._items.get(slug)
            if content is not None:
                content.published = published
        return content

"""
Señales del pipeline de publicación. El sender es la aplicación Flask.
"""
from blinker import Namespace

_signals = Namespace()

# kwargs: content (Content o None), response (Response)
request_prepared = _signals.signal('request-prepared')

# kwargs: content (Content)
content_published = _signals.signal('content-published')

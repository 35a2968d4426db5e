#!/usr/bin/env python3
"""
Purga manual de la caché de Fastly con la configuración del entorno.

Uso:
    ufastly-purge
    ufastly-purge --service-id abc123
    ufastly-purge --dry-run
"""
import sys
import json
import argparse
import logging
from typing import List, Optional

from ufastly.config import config
from ufastly.purge import FastlyClient, PurgeNotifier, build_purge_request

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None):
    """Parse argumentos de línea de comandos"""
    parser = argparse.ArgumentParser(
        description='Purga toda la caché de un servicio Fastly'
    )
    parser.add_argument(
        '--service-id',
        '-s',
        type=str,
        default=None,
        help='ID del servicio Fastly (default: FASTLY_SERVICE_ID)'
    )
    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Muestra el request sin enviarlo'
    )
    parser.add_argument(
        '--verbose',
        '-v',
        action='store_true',
        help='Logging en nivel DEBUG'
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    fastly = config.fastly
    service_id = args.service_id or fastly.service_id
    if not service_id:
        print("Error: no service id (use --service-id or FASTLY_SERVICE_ID)", file=sys.stderr)
        return 2

    client = FastlyClient(fastly.api_key, fastly.api_url)

    if args.dry_run:
        purge_request = build_purge_request(service_id)
        print(json.dumps({
            'method': purge_request.method,
            'url': client.url_for(purge_request),
        }, indent=2))
        return 0

    try:
        outcome = PurgeNotifier(client, service_id).purge_all()
    finally:
        client.close()

    print(json.dumps({
        'service_id': outcome.service_id,
        'ok': outcome.ok,
        'status_code': outcome.status_code,
        'error': outcome.error,
    }, indent=2))

    return 0 if outcome.ok else 1


if __name__ == '__main__':
    sys.exit(main())

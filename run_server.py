#!/usr/bin/env python3
"""
Benefits BPP server.

Serves the protocol actions (search, select, init) and the benefit listing
reads over HTTP. Configuration comes from the environment / .env:

    STRAPI_URL, STRAPI_TOKEN, PROVIDER_UBA_UI_URL, BPP_ID, BPP_URI   (required)
    DATABASE_URL, LOG_LEVEL                                           (optional)

Usage:
    python run_server.py                      # 0.0.0.0:3000
    python run_server.py --port 8080
    python run_server.py --log-level DEBUG
"""

import sys
import argparse
import logging

import uvicorn

from src.api.routes import create_app
from src.core.config import Settings
from src.core.errors import MissingConfiguration


logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description='Run the benefits BPP server')
    parser.add_argument('--host', default='0.0.0.0', help='Bind address')
    parser.add_argument('--port', '-p', type=int, default=3000, help='Bind port')
    parser.add_argument('--log-level', help='Override LOG_LEVEL')
    args = parser.parse_args()

    settings = Settings.from_env()
    level = (args.log_level or settings.log_level).upper()

    logging.basicConfig(level=level, format='%(asctime)s - %(levelname)s - %(message)s')

    try:
        app = create_app(settings)
    except MissingConfiguration as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info(f"Starting benefits BPP on {args.host}:{args.port} ({settings!r})")
    uvicorn.run(app, host=args.host, port=args.port, log_level=level.lower())


if __name__ == '__main__':
    main()

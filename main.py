#!/usr/bin/env python3
"""
Oyou server -- start the HTTP listener.

Usage:
  python main.py
  python main.py --port 8000
  python main.py --reload

Environment variables (see core/config.py for the full list):
  ACCESS_TOKEN_SECRET   Signing secret for issued credentials (>= 32 chars).
  DATABASE_URL          SQLAlchemy URL of the document store, or DB_USER /
                        DB_PASS / DB_HOST / DB_NAME for PostgreSQL.
  GOOGLE_API_KEY        Custom Search API key used by GET /search.
  GOOGLE_CSE_ID         Programmable search engine id used by GET /search.
  PORT                  Listen port (default 5000).
"""

import argparse

import uvicorn

from core.config import get_settings


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Run the Oyou API server.")
    parser.add_argument("--host", default=settings.host, help=f"Bind address (default: {settings.host})")
    parser.add_argument("--port", type=int, default=settings.port, help=f"Listen port (default: {settings.port})")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes (development only)")
    args = parser.parse_args()

    uvicorn.run("api.main:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()

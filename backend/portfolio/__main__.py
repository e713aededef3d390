"""Development server launcher.

Usage:
    python -m portfolio
    python -m portfolio --reload
    python -m portfolio --host 0.0.0.0 --port 3001
"""

import argparse

import uvicorn

from portfolio.config import get_settings


def main() -> None:
    settings = get_settings()

    parser = argparse.ArgumentParser(prog="portfolio")
    parser.add_argument("--host", default=settings.host)
    parser.add_argument("--port", type=int, default=settings.port)
    parser.add_argument("--reload", action="store_true", default=False)
    args = parser.parse_args()

    uvicorn.run(
        "portfolio.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()

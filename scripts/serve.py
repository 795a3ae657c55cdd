#!/usr/bin/env python
"""
Run the BidSmart API with uvicorn.

Usage:
    python scripts/serve.py [--host 0.0.0.0] [--port 8000] [--reload]
"""
import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import uvicorn

from bidsmart.core.logging import setup_logging
from bidsmart.settings import settings


def main():
    parser = argparse.ArgumentParser(description="Serve the BidSmart API")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--reload", action="store_true")
    args = parser.parse_args()

    setup_logging(settings.log_level, settings.log_file)
    uvicorn.run(
        "bidsmart.api.main:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())

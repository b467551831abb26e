#!/usr/bin/env python3
"""Run the diffview HTTP API under uvicorn."""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import uvicorn

from diffview.settings import get_api_host, get_api_port


def main():
    parser = argparse.ArgumentParser(
        description="Serve POST /render and the meta endpoints",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment:
  DIFFVIEW_API_HOST   default bind address (127.0.0.1)
  DIFFVIEW_API_PORT   default port (8000)
  LOG_LEVEL           application log level
        """,
    )
    parser.add_argument("--host", default=get_api_host(), help="Bind address")
    parser.add_argument("--port", type=int, default=get_api_port(), help="Listen port")
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Restart when files under src/ change",
    )
    parser.add_argument(
        "--log-level",
        default="info",
        choices=["critical", "error", "warning", "info", "debug"],
        help="uvicorn log level (default: info)",
    )
    args = parser.parse_args()

    print(f"diffview API on http://{args.host}:{args.port} (docs at /docs)")

    uvicorn.run(
        "diffview.api.app:app",
        host=args.host,
        port=args.port,
        log_level=args.log_level,
        reload=args.reload,
        reload_dirs=["src"] if args.reload else None,
    )


if __name__ == "__main__":
    main()

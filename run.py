#!/usr/bin/env python3
"""
Entry point for running the Transaction Service.

Usage:
    python run.py [--port PORT] [--host HOST] [--reload]
"""

import argparse
import uvicorn


def main():
    parser = argparse.ArgumentParser(description="Transaction Service")
    parser.add_argument("--port", type=int, default=8080, help="Port to run on")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    args = parser.parse_args()

    print("\n" + "=" * 50)
    print("  Transaction Service")
    print("=" * 50)
    print(f"\n  URL: http://{args.host}:{args.port}\n")
    print("  Press Ctrl+C to stop the server\n")
    print("=" * 50 + "\n")

    uvicorn.run(
        "transaction_service.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="info"
    )


if __name__ == "__main__":
    main()

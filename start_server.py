#!/usr/bin/env python3
"""
Start the Weapon Reference Web Server

Usage:
    python start_server.py [--port PORT] [--host HOST] [--data-source PATH_OR_URL]

Example:
    python start_server.py --port 8080 --data-source https://example.com/weaponData.csv
"""

import argparse
import os

from weapon_database import DATA_SOURCE_ENV


def main():
    parser = argparse.ArgumentParser(description='Weapon Reference Web Server')
    parser.add_argument('--port', type=int, default=8000, help='Port to run the server on')
    parser.add_argument('--host', type=str, default='127.0.0.1', help='Host to bind to')
    parser.add_argument('--reload', action='store_true', help='Enable auto-reload for development')
    parser.add_argument('--data-source', type=str, default=None,
                        help='Weapon CSV file path or http(s) URL (default: weaponData.csv)')
    args = parser.parse_args()

    # Passed through the environment so the reload subprocess sees it too
    if args.data_source:
        os.environ[DATA_SOURCE_ENV] = args.data_source

    print("=" * 60)
    print("Weapon Reference")
    print("=" * 60)
    print()
    print(f"Starting server at http://{args.host}:{args.port}")
    print(f"API Documentation at http://{args.host}:{args.port}/docs")
    if args.data_source:
        print(f"Weapon data: {args.data_source}")
    print()
    print("Press Ctrl+C to stop the server.")
    print("=" * 60)

    import uvicorn
    uvicorn.run(
        "api:app",
        host=args.host,
        port=args.port,
        reload=args.reload
    )


if __name__ == "__main__":
    main()

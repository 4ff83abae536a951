"""
Startup script for the Pizza Shop API.

Usage:
    # Run on the default port
    python -m pizza_shop

    # Run with custom port
    python -m pizza_shop --port 8001

    # Run with reload for development
    python -m pizza_shop --reload
"""

import argparse


def main():
    parser = argparse.ArgumentParser(description="Run the Pizza Shop API")
    parser.add_argument(
        "--host",
        default="0.0.0.0",
        help="Host to bind to (default: 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        "-p",
        type=int,
        default=8000,
        help="Port to run on (default: 8000)",
    )
    parser.add_argument(
        "--reload",
        "-r",
        action="store_true",
        help="Enable auto-reload for development",
    )
    args = parser.parse_args()

    import uvicorn

    uvicorn.run(
        "pizza_shop.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Habit Tracker - Main Entry Point

Runs the habit tracker API server.

Usage:
    python main.py
"""

import argparse
import logging

from config.settings import settings


def main():
    parser = argparse.ArgumentParser(description="Habit Tracker API")

    parser.add_argument("--host", default="0.0.0.0", help="API host")
    parser.add_argument("--port", type=int, default=5000, help="API port")
    parser.add_argument("--debug", action="store_true", help="Enable debug mode")

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    from webapp.app import create_app
    app = create_app({"debug": args.debug or settings.debug})
    print(f"🚀 Starting Habit Tracker API...")
    print(f"📍 Server running at: http://{args.host}:{args.port}")
    print(f"🔧 Debug mode: {'ON' if args.debug else 'OFF'}")
    app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Course Catalog Admin - API Server (Entry Point)
Serves the admin course, video, user and dashboard endpoints
"""

import os

from src.api.app import create_app

app = create_app()


if __name__ == "__main__":
    port = int(os.environ.get("PORT", "5000"))
    debug = os.environ.get("ENVIRONMENT", "development").lower() == "development"
    app.run(host="0.0.0.0", port=port, debug=debug)

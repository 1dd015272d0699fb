#!/usr/bin/env python3
"""
Startup script for the NU Schedule API server
Seeds the course catalog on first start, then serves the FastAPI application
"""

import uvicorn
from dotenv import load_dotenv

from nuschedule.core.config import get_settings


def main() -> None:
    """Run the FastAPI server"""
    load_dotenv()
    settings = get_settings()
    print("Starting NU Schedule API server...")
    print(f"OpenAPI docs available at: http://localhost:{settings.api_port}/docs")

    uvicorn.run(
        "nuschedule.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level="info",
    )


if __name__ == "__main__":
    main()

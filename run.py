#!/usr/bin/env python3
"""
Run script for the document-management platform services.
Launches one FastAPI service per process: `python run.py users` or `python run.py auth`.
"""
import os
import sys
import traceback
import uvicorn

SERVICES = {
    "users": ("docservices.users.main:app", int(os.getenv("USER_SERVICE_PORT", 8001))),
    "auth": ("docservices.auth.main:app", int(os.getenv("AUTH_SERVICE_PORT", 8002))),
}

if __name__ == "__main__":
    name = sys.argv[1] if len(sys.argv) > 1 else ""
    if name not in SERVICES:
        print(f"Usage: {sys.argv[0]} [{'|'.join(SERVICES)}]")
        sys.exit(2)

    app_path, port = SERVICES[name]
    try:
        # Print information about the server
        print(f"Starting {name} service...")
        print(f"Access the API at http://localhost:{port}")
        print(f"API documentation at http://localhost:{port}/docs")

        # Run the server
        uvicorn.run(
            app_path,
            host="0.0.0.0",
            port=port,
            reload=os.getenv("RELOAD", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "info").lower()
        )
    except Exception as e:
        print(f"Error starting {name} service: {e}")
        traceback.print_exc()
        sys.exit(1)

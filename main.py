"""
main.py: Server launcher and entry point.

Run this file to start the SmartPark API:

    python main.py

This file does NOT contain application logic. See app.py for the FastAPI
application and engine wiring.
"""

from __future__ import annotations

import uvicorn


HOST = "127.0.0.1"
PORT = 8000


def main() -> None:
    """Start the SmartPark API server."""
    print("=" * 60)
    print("  SmartPark: Slot Allocation Engine")
    print("=" * 60)
    print(f"  Server   : http://{HOST}:{PORT}")
    print(f"  API docs : http://{HOST}:{PORT}/docs")
    print("=" * 60)
    print("  Press CTRL+C to stop\n")

    uvicorn.run(
        "app:app",
        host=HOST,
        port=PORT,
        reload=True,
        log_level="info",
    )


if __name__ == "__main__":
    main()

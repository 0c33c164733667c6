"""
Booking form entry point.

Runs the interactive console form against the configured booking API.

Usage:
    python main.py
    python main.py --base-url http://localhost:5000/api --date 2025-03-18
"""

from console_form import main as run_console


if __name__ == "__main__":
    run_console()

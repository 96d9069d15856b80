"""
Health Check Script.
Verifies config, DI wiring and database reachability without starting the API.
"""

import sys
import os
from colorama import init, Fore, Style

# Add root to python path
PROJ_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJ_ROOT)

init(autoreset=True)

def check_step(name: str):
    print(f"{Fore.CYAN}➤ Checking: {name}...{Style.RESET_ALL}", end=" ")

def step_ok(msg: str = "OK"):
    print(f"{Fore.GREEN}✓ {msg}")

def step_fail(msg: str):
    print(f"{Fore.RED}✗ FAILED: {msg}")
    sys.exit(1)

def main():
    print(f"{Style.BRIGHT}Running Sample Data API Health Check...{Style.RESET_ALL}\n")

    # 1. Configuration
    check_step("Configuration")
    try:
        from config import DATABASE_URL, API_PORT
        step_ok(f"API port {API_PORT}")
    except Exception as e:
        step_fail(str(e))

    # 2. DI registrations
    check_step("DI Container Registrations")
    try:
        from api.dependencies import build_container, verify_registrations
        container = build_container()
        verify_registrations(container)
        step_ok()
    except Exception as e:
        step_fail(str(e))

    try:
        # 3. Database connectivity
        check_step("Database Connectivity")
        try:
            from sqlalchemy import text
            engine = container.engine()
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            step_ok(DATABASE_URL.split("@")[-1])
        except Exception as e:
            step_fail(str(e))

        # 4. Seeded rows through the resolved repository
        check_step("Seeded Sample Data")
        try:
            rows = container.repository().get_all()
            if not rows:
                raise ValueError("No rows found, run `python -m src.devtask seed`")
            step_ok(f"{len(rows)} rows")
        except Exception as e:
            step_fail(str(e))
    finally:
        # step_fail raises SystemExit
        container.shutdown_resources()

    print(f"\n{Fore.GREEN}{Style.BRIGHT}ALL CHECKS PASSED.{Style.RESET_ALL}")

if __name__ == "__main__":
    main()

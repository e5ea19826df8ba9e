"""
Setup verification script for the portfolio backend.
Checks dependencies, configuration and the database are properly set up.
"""
import asyncio
import importlib
import os
import sys
from typing import List, Tuple

# Color codes for terminal output
GREEN = "\033[92m"
RED = "\033[91m"
YELLOW = "\033[93m"
BLUE = "\033[94m"
RESET = "\033[0m"

# Import name -> distribution name
REQUIRED_PACKAGES = {
    "fastapi": "fastapi",
    "uvicorn": "uvicorn",
    "sqlalchemy": "sqlalchemy",
    "pydantic_settings": "pydantic-settings",
    "email_validator": "email-validator",
    "jose": "python-jose",
    "passlib": "passlib",
    "aiofiles": "aiofiles",
    "httpx": "httpx",
    "jinja2": "jinja2",
    "multipart": "python-multipart",
}


def print_status(message: str, status: bool):
    """Print colored status message."""
    symbol = f"{GREEN}✓{RESET}" if status else f"{RED}✗{RESET}"
    print(f"{symbol} {message}")


async def check_python_version() -> bool:
    """Check Python version is 3.10+."""
    version = sys.version_info
    if version.major == 3 and version.minor >= 10:
        print_status(f"Python version: {version.major}.{version.minor}.{version.micro}", True)
        return True
    else:
        print_status(f"Python version {version.major}.{version.minor} (requires 3.10+)", False)
        return False


async def check_dependencies() -> bool:
    """Check if required packages are installed."""
    all_installed = True
    for module, distribution in REQUIRED_PACKAGES.items():
        try:
            importlib.import_module(module)
            print_status(f"Package '{distribution}' installed", True)
        except ImportError:
            print_status(f"Package '{distribution}' missing (pip install {distribution})", False)
            all_installed = False

    return all_installed


async def check_env_file() -> bool:
    """Check if .env file exists."""
    if os.path.exists(".env"):
        print_status(".env file exists", True)
        return True
    else:
        print_status(".env file missing (defaults will be used)", False)
        return False


async def check_settings() -> bool:
    """Warn about insecure or missing settings."""
    from app.config import settings

    ok = True
    if settings.JWT_SECRET == "fallback-secret-key":
        print_status("JWT_SECRET uses the insecure fallback value", False)
        ok = False
    else:
        print_status("JWT_SECRET configured", True)

    has_mail = bool(settings.contact_recipient)
    print_status(f"Contact mail recipient: {settings.contact_recipient or 'not set'}", has_mail)
    return ok and has_mail


async def check_upload_dir() -> bool:
    """Check if upload directory exists."""
    from app.config import settings

    if os.path.isdir(settings.UPLOAD_DIR):
        print_status(f"Upload directory exists ({settings.UPLOAD_DIR})", True)
        return True
    else:
        print_status("Upload directory missing (will be created on startup)", False)
        return False


async def check_database() -> bool:
    """Connect with the configured DATABASE_URL and run SELECT 1."""
    from sqlalchemy import text

    from app.config import settings
    from app.database import engine

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        print_status(f"Database connection successful ({engine.url.get_backend_name()})", True)
        return True
    except Exception as e:
        print_status(f"Database connection failed: {str(e)}", False)
        if settings.DATABASE_URL.startswith("postgresql"):
            print(f"  {YELLOW}Is PostgreSQL running? Check DATABASE_URL in .env{RESET}")
        return False
    finally:
        await engine.dispose()


async def main():
    """Run all verification checks."""
    print(f"\n{BLUE}{'='*60}{RESET}")
    print(f"{BLUE}Portfolio Backend - Setup Verification{RESET}")
    print(f"{BLUE}{'='*60}{RESET}\n")

    checks: List[Tuple[str, callable]] = [
        ("Python Version", check_python_version),
        ("Dependencies", check_dependencies),
        ("Environment File", check_env_file),
        ("Settings", check_settings),
        ("Upload Directory", check_upload_dir),
        ("Database", check_database),
    ]

    results = []

    for check_name, check_func in checks:
        print(f"\n{BLUE}Checking {check_name}...{RESET}")
        try:
            result = await check_func()
            results.append(result)
        except Exception as e:
            print_status(f"Error during check: {str(e)}", False)
            results.append(False)

    # Summary
    print(f"\n{BLUE}{'='*60}{RESET}")
    passed = sum(results)
    total = len(results)

    if passed == total:
        print(f"{GREEN}✓ All checks passed! ({passed}/{total}){RESET}")
        print(f"\n{GREEN}You're ready to run the backend:{RESET}")
        print(f"  python seed_database.py")
        print(f"  uvicorn app.main:app --reload")
    else:
        print(f"{RED}✗ Some checks failed ({passed}/{total} passed){RESET}")
        print(f"\n{YELLOW}Please fix the issues above before running the backend.{RESET}")
        sys.exit(1)

    print(f"{BLUE}{'='*60}{RESET}\n")


if __name__ == "__main__":
    asyncio.run(main())

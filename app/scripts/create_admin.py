"""
Create Admin Script
Bootstraps the first admin account. Accounts are normally created by an
admin or volunteer through POST /users; the very first admin has nobody to
create it, so this script runs the same provisioning saga with the
service-role client and no caller check.

Usage:
    python -m app.scripts.create_admin --phone 0812345678 --name "Program Lead"
    (password is read from ADMIN_PASSWORD or prompted)
"""

import argparse
import getpass
import os
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from app.config import settings
from app.core.exceptions import SwimProgramError, WeakPassword
from app.database.supabase_client import get_service_supabase
from app.modules.users.provisioning import AccountProvisioning
from app.modules.users.schemas import AccountCreate
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def create_admin(phone: str, password: str, full_name: str, preferred_language: str = "en") -> str:
    """Provision an admin account and return its identity id"""
    if len(password) < settings.password_min_length:
        raise WeakPassword(f"Password must be at least {settings.password_min_length} characters")
    account = AccountCreate(
        phone=phone,
        password=password,
        role="admin",
        full_name=full_name,
        preferred_language=preferred_language,
    )
    return AccountProvisioning(get_service_supabase()).run(account)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Create the first admin account")
    parser.add_argument("--phone", required=True)
    parser.add_argument("--name", required=True)
    parser.add_argument("--language", choices=["en", "id"], default="en")
    args = parser.parse_args(argv)

    password = os.environ.get("ADMIN_PASSWORD") or getpass.getpass("Admin password: ")

    try:
        logger.info("Creating admin account...")
        user_id = create_admin(args.phone, password, args.name, args.language)
        logger.info(f"Admin account created: {user_id}")
    except SwimProgramError as e:
        logger.error(f"Could not create admin: {e.detail}")
        sys.exit(1)


if __name__ == "__main__":
    main()

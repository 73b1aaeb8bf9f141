"""
Ensure Admin Script
Runs the role reconciler once for the designated admin email (or --email).
Can be run manually or as part of a nightly job:

    python -m app.scripts.ensure_admin
    python -m app.scripts.ensure_admin --email someone@example.com
"""

import argparse
import logging
import sys

from app.config import settings
from app.database.supabase_client import SupabaseClient
from app.modules.roles.reconciler import RoleReconciler
from app.modules.roles.stores import IdentityStore, ProfileStore

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Ensure an account holds the admin role")
    parser.add_argument("--email", default=settings.designated_admin_email)
    args = parser.parse_args(argv)

    if not settings.supabase_service_role_key:
        logger.error("SUPABASE_SERVICE_ROLE_KEY is required to list users")
        return 2

    supabase = SupabaseClient.get_service_client()
    reconciler = RoleReconciler(IdentityStore(supabase), ProfileStore(supabase), args.email)
    outcome = reconciler.reconcile()

    if outcome.success:
        logger.info(outcome.message)
        return 0
    logger.error(outcome.message)
    return 1


if __name__ == "__main__":
    sys.exit(main())

"""Print a back-office token without going through ``/admin/login``.

Useful for scripts and the API client.  The token is signed with the
current ``SECRET_KEY`` and expires after ``--days`` days.

Usage:
    python create_token.py --days 7
"""
import argparse

from storefront_api.app.core.config import settings
from storefront_api.app.core.security import ADMIN_ROLE, create_access_token


def main() -> None:
    ap = argparse.ArgumentParser(description="Issue an admin token for the storefront API.")
    ap.add_argument("--days", type=int, default=1, help="Token lifetime in days (default: 1)")
    ap.add_argument("--subject", default=settings.admin_id, help="Operator name recorded in the audit log")
    args = ap.parse_args()
    token = create_access_token({"sub": args.subject, "role": ADMIN_ROLE}, expires_delta=args.days * 24 * 60 * 60)
    print(token)


if __name__ == "__main__":
    main()

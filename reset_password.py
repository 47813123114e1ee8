#!/usr/bin/env python3
"""
Reset a customer's password in the storefront SQLite database.

This script does not read or reveal existing passwords.  It stores a
new PBKDF2 hash (format ``salthex$hashhex``) for the given email.  It
can also print a hash for ``ADMIN_PASSWORD_HASH`` with ``--hash-only``.

Usage:
    python reset_password.py --db ./storefront_api/storefront.db --email user@example.com
    python reset_password.py --hash-only
"""

import argparse
import getpass
import os
import sqlite3
import sys

from storefront_api.app.core.security import hash_password


def main():
    ap = argparse.ArgumentParser(description="Reset a storefront user password (SQLite).")
    ap.add_argument("--db", help="Path to SQLite DB file (e.g., ./storefront_api/storefront.db)")
    ap.add_argument("--email", help="User email to update")
    ap.add_argument("--password", help="New password. If omitted, you'll be prompted securely.")
    ap.add_argument("--hash-only", action="store_true", help="Only print the hash, do not touch the database")
    args = ap.parse_args()

    if not args.hash_only and not (args.db and args.email):
        ap.error("--db and --email are required unless --hash-only is given")

    new_password = args.password or getpass.getpass("Enter NEW password: ")
    if not new_password:
        print("[!] Empty password is not allowed.", file=sys.stderr)
        sys.exit(1)

    hashed = hash_password(new_password)
    if args.hash_only:
        print(hashed)
        return

    if not os.path.exists(args.db):
        print(f"[!] DB not found: {args.db}", file=sys.stderr)
        sys.exit(1)

    email = args.email.strip().lower()
    conn = sqlite3.connect(args.db)
    try:
        cur = conn.cursor()
        cur.execute("SELECT id FROM users WHERE email = ?", (email,))
        if not cur.fetchone():
            print(f"[!] No user found with email: {email}", file=sys.stderr)
            sys.exit(2)
        cur.execute("UPDATE users SET password = ? WHERE email = ?", (hashed, email))
        conn.commit()
        print(f"[+] Password updated for user: {email}")
    finally:
        conn.close()


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Admin Password Hash

Prints the bcrypt hash to put in ADMIN_PASSWORD_HASH.
Usage: python scripts/hash_admin_password.py
"""
import getpass
import sys
sys.path.insert(0, '.')

from jobportal.core.auth import hash_password


def main():
    password = getpass.getpass("Admin password: ")
    if password != getpass.getpass("Repeat password: "):
        raise SystemExit("Passwords do not match")
    print(f"ADMIN_PASSWORD_HASH={hash_password(password)}")


if __name__ == "__main__":
    main()

"""Backfill a month of sample metrics for one user.

Usage: python -m scripts.seed_sample_data <uid>
"""
import sys

from app.core.firebase import init_firebase
from app.services.logger import setup_logging
from app.services.sample_data import seed_sample_data
from app.services.storage import get_storage


def seed(uid):
    created = seed_sample_data(get_storage(), uid)
    if created:
        print(f"Added {created} sample metrics for {uid}")
    else:
        print(f"Skipped {uid} (metrics exist)")


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(__doc__.strip().splitlines()[-1])
        sys.exit(1)
    setup_logging()
    init_firebase()
    seed(sys.argv[1])

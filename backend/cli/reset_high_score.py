#!/usr/bin/env python3
"""
Reset stored high scores.

Deletes every row from the high_scores table while preserving the schema.

Usage:
    python backend/cli/reset_high_score.py [--confirm]
"""

import os
import sys
import argparse

# Add parent directory to path to import database modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from database import get_database_path  # noqa: E402
from data_access import reset_high_scores  # noqa: E402


def reset_high_score(confirm: bool = False) -> bool:
    """
    Delete all stored high scores.

    Args:
        confirm: If True, skip confirmation prompt

    Returns:
        True if reset was successful, False otherwise
    """
    db_path = get_database_path()

    if not confirm:
        print("=" * 70)
        print("HIGH SCORE RESET WARNING")
        print("=" * 70)
        print(f"Database path: {db_path}")
        print("\nThis will DELETE every stored high score.")
        print("=" * 70)

        response = input("\nType 'RESET' to confirm: ")

        if response != 'RESET':
            print("Reset cancelled")
            return False

    try:
        deleted = reset_high_scores(db_path)
    except Exception as e:
        print(f"\nError resetting high scores: {e}")
        return False

    print(f"Cleared high_scores: {deleted} rows deleted")
    return True


def main():
    parser = argparse.ArgumentParser(
        description="Reset stored high scores"
    )
    parser.add_argument(
        '--confirm',
        action='store_true',
        help="Skip confirmation prompt"
    )

    args = parser.parse_args()

    success = reset_high_score(confirm=args.confirm)
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()

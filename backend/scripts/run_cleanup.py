"""
Manual purge of expired login sessions.

Automatic cleanup is handled by SessionCleanupScheduler (runs daily). This
script is for one-off maintenance and for checking the purge in development.
"""
import sys
import os

# Add the parent directory to sys.path to allow imports from src
sys.path.append(os.path.join(os.path.dirname(__file__), '../src'))

from core.database import SessionLocal
from services.session_service import SessionService


def main():
    print("Starting expired session cleanup...")
    db = SessionLocal()
    try:
        deleted = SessionService.purge_expired_sessions(db)
        print(f"Deleted {deleted} expired sessions.")
    except Exception as e:
        print(f"Error during cleanup: {e}")
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    main()

"""
@file: celery_worker.py
@description:
Entry point for starting the Celery worker and beat scheduler that run the
periodic pick result sync. It's placed at the project root so the Celery CLI
can import it without package path juggling.

@usage:
To start a worker consuming the results queue:
    $ celery -A celery_worker worker -Q results --loglevel=info

To start the beat scheduler:
    $ celery -A celery_worker beat --loglevel=info

To start both worker and beat scheduler:
    $ celery -A celery_worker worker -Q results --beat --loglevel=info

@dependencies:
- app.workers.celery_app: For Celery configuration
"""

from app.workers.celery_app import celery_app

# This makes the Celery app importable by the Celery command-line interface
app = celery_app

if __name__ == '__main__':
    print("ERROR: This file should not be executed directly.")
    print("Please use the celery command instead:")
    print("  $ celery -A celery_worker worker -Q results --loglevel=info")
    print("  $ celery -A celery_worker beat --loglevel=info")

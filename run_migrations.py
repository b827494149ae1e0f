"""
Apply schema migrations, then make sure every table exists
"""
import os

from flask_migrate import upgrade
from app import app, initialize_app

MIGRATIONS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'migrations')

with app.app_context():
    print(f"[MIGRATION] Upgrading database using {MIGRATIONS_DIR}")
    upgrade(directory=MIGRATIONS_DIR)
    print("[SUCCESS] Migrations applied")

    initialize_app()

# create_tables.py
# Run this once to create the machines table if it is missing.

from sqlalchemy import inspect

from app import create_app
from app.extensions import db

app = create_app()

with app.app_context():
    db.create_all()
    tables = inspect(db.engine).get_table_names()
    print("Tables in DB:", tables)
    if "machines" in tables:
        print("Success: 'machines' table is present.")
    else:
        print("'machines' not found. Check that the Machine model is imported.")

# app/extensions.py
from flask_sqlalchemy import SQLAlchemy

# Shared instance; bound to the app inside create_app()
db = SQLAlchemy()

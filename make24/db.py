# make24/db.py
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

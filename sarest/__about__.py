__version__ = "1.0.0"
__description__ = "sarest : SqlAlchemy Flask-Restful CRUD resources"

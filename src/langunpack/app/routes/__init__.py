"""Blueprint registrations for application routes."""

from flask import Flask

from .tables import blueprint as tables_blueprint


def register_routes(app: Flask) -> None:
    """Register all Flask blueprints with the provided application."""

    app.register_blueprint(tables_blueprint)

"""WSGI entrypoint for serving extracted tables behind a production server."""

from langunpack.app import create_app

# WSGI servers expect a module-level variable named ``application``.
application = create_app()

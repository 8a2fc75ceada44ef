"""WSGI entrypoint for Passenger-style hosts."""

from jstranslation.backend.app import create_app

# Settings come from JSTRANSLATION_CONFIG and the JSTRANSLATION_* variables.
application = create_app()

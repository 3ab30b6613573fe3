"""Allow ``python -m cldr_names``."""

from .main import app

app()

"""Friday waitlist site: client interaction controllers and form API."""

__version__ = "1.0.0"

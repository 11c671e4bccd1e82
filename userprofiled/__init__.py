"""userprofiled - REST API and CLI for the user profile engine."""

__version__ = "0.1.0"

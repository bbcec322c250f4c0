"""Child-theme asset resolution, registration and build pipeline."""

__version__ = "0.1.0"

"""Package metadata."""

PACKAGE_NAME = "mason-gcp"
__version__ = "0.1.0"

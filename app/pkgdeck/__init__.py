"""pkgdeck - Reconcile a local package installation against a release catalog."""

__version__ = "0.1.0"

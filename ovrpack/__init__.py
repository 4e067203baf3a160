"""Package PWAs as Meta Quest APKs with the Oculus platform utility."""

__version__ = "0.1.0"

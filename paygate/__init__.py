"""Payment gateway and rates services with simulated banks and transaction tracking."""

__version__ = "0.1.0"
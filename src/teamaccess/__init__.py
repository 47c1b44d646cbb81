"""Team members and Facebook group access for owner accounts."""

__version__ = "1.0.0"

"""Match one résumé against public job listings and draft application material."""

__version__ = "0.1.0"

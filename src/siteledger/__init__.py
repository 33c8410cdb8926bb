"""SiteLedger: project inventory ledger for construction projects."""

__version__ = "1.0.0"

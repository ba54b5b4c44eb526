"""MeterPay prepaid utility meter service."""

__version__ = "0.3.0"

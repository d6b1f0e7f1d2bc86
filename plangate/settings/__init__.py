"""Environment-driven settings."""

from .config import BillingConfig, load_billing_config

__all__ = ["BillingConfig", "load_billing_config"]

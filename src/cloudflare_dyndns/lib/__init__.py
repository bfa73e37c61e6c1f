"""
Core library for Cloudflare DynDNS
"""

from .config import Config, ConfigError
from .reconcile import Reconciler, ReconcileReport, ReconcileAborted, FailurePolicy, OutcomeStatus
from .retry import RetryPolicy, ExponentialBackoff

__all__ = [
    "Config",
    "ConfigError",
    "Reconciler",
    "ReconcileReport",
    "ReconcileAborted",
    "FailurePolicy",
    "OutcomeStatus",
    "RetryPolicy",
    "ExponentialBackoff",
]

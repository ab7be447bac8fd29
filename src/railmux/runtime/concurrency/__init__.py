"""Concurrency primitives."""

from .wait import Settled, SettledStatus, gather_settled

__all__ = ["Settled", "SettledStatus", "gather_settled"]

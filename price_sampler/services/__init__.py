"""Service modules"""
from .sampler import Sampler, TickResult

__all__ = ["Sampler", "TickResult"]

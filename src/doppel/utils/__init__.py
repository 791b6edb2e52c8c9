"""Formatting helpers shared by front ends."""

from .convert_utils import ConvertUtils

__all__ = ["ConvertUtils"]

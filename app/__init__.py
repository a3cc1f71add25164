# -*- coding: utf-8 -*-
"""
TVI Application Core Module
"""

from .config import Config, Pages

__all__ = ["Config", "Pages"]

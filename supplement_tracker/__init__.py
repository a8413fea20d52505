# -*- coding: utf-8 -*-
"""Supplement & water intake tracker backend."""

__version__ = "0.1.0"

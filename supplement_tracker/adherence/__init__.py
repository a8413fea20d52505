# -*- coding: utf-8 -*-
"""Adherence engine: streak calculation and day-by-day history aggregation."""

# -*- coding: utf-8 -*-
"""Supplement catalog plus dosage and water-goal heuristics."""

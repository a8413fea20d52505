# -*- coding: utf-8 -*-
"""Achievement rules and monotonic unlock tracking."""

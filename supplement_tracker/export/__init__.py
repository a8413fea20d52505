# -*- coding: utf-8 -*-
"""CSV and plain-text history export."""

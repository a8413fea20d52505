# -*- coding: utf-8 -*-
"""Record store: profile, roster, water and consumption logs, unlocked achievements."""

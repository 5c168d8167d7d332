# -*- coding: utf-8 -*-
"""Anonymous authentication sessions."""

# -*- coding: utf-8 -*-
"""Dashboard presentation: progress ring, meal cards, empty state."""

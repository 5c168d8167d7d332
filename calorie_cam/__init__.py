# -*- coding: utf-8 -*-
"""Calorie Cam backend: food photo -> label -> catalog -> meal log -> daily total."""

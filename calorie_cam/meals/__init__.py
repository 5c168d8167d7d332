# -*- coding: utf-8 -*-
"""Meal logging domain (record store, daily aggregation, recording flow)."""

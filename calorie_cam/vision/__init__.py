# -*- coding: utf-8 -*-
"""Image downsampling and external label detection."""

# -*- coding: utf-8 -*-
"""Food catalog domain."""

# -*- coding: utf-8 -*-
"""Photo capture sessions (capture -> label detection -> meal record)."""

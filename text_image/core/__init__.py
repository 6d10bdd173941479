# -*- coding: utf-8 -*-
"""Canvas creation, drawing, watermarking and encoding."""

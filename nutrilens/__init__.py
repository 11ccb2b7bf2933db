# -*- coding: utf-8 -*-
"""NutriLens: food photo nutrition estimates with a session scan log."""

__version__ = "1.0.0"

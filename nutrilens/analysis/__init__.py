# -*- coding: utf-8 -*-
"""Analysis pipeline: upload ingest, prompt, inference, parsing and cleanup."""

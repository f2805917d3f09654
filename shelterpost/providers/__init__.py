"""Concrete backend providers.

``posts/`` and ``categories/`` each hold a live httpx adapter and an
in-memory stub.  ``platform_http`` is the shared request helper used by the
live adapters.
"""

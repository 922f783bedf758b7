"""
friday.geo — Caller region detection and the consumers that depend on it.

One ``GeoResolver`` owns the lookup; everything else reads it through a
``GeoContext``::

    resolver = GeoResolver()
    geo = GeoContext(resolver)
    resolver.start()
"""

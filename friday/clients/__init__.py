"""
friday.clients — Outbound HTTP clients (httpx).

Import surface::

    from friday.clients.friday_api import FridayApiClient
    from friday.clients.site import SiteClient
    from friday.clients.geo_lookup import GeoLookupClient
"""

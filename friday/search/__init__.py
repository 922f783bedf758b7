"""
friday.search — Debounced, cancellable typeahead search.

Import surface::

    from friday.search.debounce import DebouncedDispatcher
    from friday.search.tracker import RequestTracker
    from friday.search.city_search import CitySearchController
"""

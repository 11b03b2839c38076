"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, constants, parameter codes
    └── {feature}.py      # Fetch + parse functions, plus a Source class

Sources are thin adapters: they turn one upstream wire format into the
models in ``schemas.py`` and raise on network or parse failure. They never
cache and never retry beyond the shared HTTP session's transport retries;
caching lives in ``services/cached.py``.

Adding a new datasource
-----------------------
1. Create ``datasources/{name}/`` with the files above.
   ``weather/`` is the smallest example.

2. Write a fetch function (raw JSON) and a parse function (models)::

       from hatchcast.services.http import session

       def fetch_something(lat, lon) -> dict[str, Any]:
           resp = session.get(API_URL, params={...})
           resp.raise_for_status()
           return resp.json()

3. Wrap them in a class matching ``ReadingsSource`` or ``WeatherSource``
   from ``services/cached.py`` so it can sit behind a cache-aside fetcher.

4. Re-export public API in ``__init__.py`` with ``__all__`` and add tests
   in ``tests/test_{name}.py``.
"""

"""
Shared plumbing used by datasources and the ranker.

- http.py    - requests session with retry/backoff and default timeout
- cached.py  - cache-aside fetchers for readings and weather
- pool.py    - bounded-concurrency executor with per-task outcomes
"""

"""Hatch prediction and stream scoring.

Pure functions over datasource models: readings + weather + a reference
time in, predictions and scores out.

Dependency rule: analysis/ imports from ``schemas`` and ``reference`` only.
It never fetches data, reads a clock, or touches the cache.

Modules:
  - predictions: readings + weather + calendar -> ranked hatch predictions
  - scoring: readings + weather + predictions -> 0-100 score, quality, summary

Adding an analysis module
-------------------------
1. Create ``analysis/{name}.py`` with a pure function.
2. No I/O, no HTTP, no Prefect decorators.
3. Wire it into ``top_picks.py`` and add tests in ``tests/test_{name}.py``.
"""

from hatchcast.analysis.predictions import predict as predict
from hatchcast.analysis.predictions import representative_water_temp as representative_water_temp
from hatchcast.analysis.scoring import assess_quality as assess_quality
from hatchcast.analysis.scoring import build_summary as build_summary
from hatchcast.analysis.scoring import score_location as score_location

"""Static trout-stream reference data.

Reference data that doesn't change with API calls: the hatch catalog, the
monitored stream catalog, and prediction/scoring thresholds.

Adding a new module:
1. Create ``reference/{name}.py`` with constants/models
2. Re-export from this ``__init__.py``
"""

from hatchcast.reference.hatches import HATCHES as HATCHES
from hatchcast.reference.hatches import get_hatch as get_hatch
from hatchcast.reference.hatches import hatches_by_month as hatches_by_month
from hatchcast.reference.hatches import hatches_by_order as hatches_by_order
from hatchcast.reference.hatches import hatches_by_temp as hatches_by_temp
from hatchcast.reference.streams import STREAMS as STREAMS
from hatchcast.reference.streams import all_station_ids as all_station_ids
from hatchcast.reference.streams import get_location as get_location
from hatchcast.reference.streams import haversine_miles as haversine_miles
from hatchcast.reference.streams import locations_by_region as locations_by_region
from hatchcast.reference.streams import locations_by_state as locations_by_state
from hatchcast.reference.streams import locations_near as locations_near

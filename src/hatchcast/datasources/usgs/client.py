"""USGS Water Services API constants.

API docs:
  - Instantaneous Values: https://waterservices.usgs.gov/docs/instantaneous-values/
  - Parameter codes: https://help.waterdata.usgs.gov/codes-and-parameters
"""

IV_API = "https://waterservices.usgs.gov/nwis/iv/"

# Parameter codes we request
WATER_TEMP = "00010"  # Water temperature, degrees Celsius
DISCHARGE = "00060"  # Discharge, cubic feet per second
GAGE_HEIGHT = "00065"  # Gage height, feet

DEFAULT_PARAMS: tuple[str, ...] = (WATER_TEMP, DISCHARGE, GAGE_HEIGHT)

# USGS reports missing/invalid readings with these numeric sentinels
# (-999999 = ice-affected/equipment malfunction, -99999 = legacy no-data)
SENTINEL_VALUES = frozenset({-999999.0, -99999.0})

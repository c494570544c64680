"""
Runtime settings for TripWise.

Every value has a sensible default and may be overridden through an
environment variable. The Streamlit app additionally lets
``st.secrets`` override the database path.
"""

from __future__ import annotations

import os

# Driving-distance provider (OSRM route service)
OSRM_BASE_URL = os.environ.get("TRIPWISE_OSRM_URL", "https://router.project-osrm.org")
OSRM_PROFILE = os.environ.get("TRIPWISE_OSRM_PROFILE", "driving")
REQUEST_TIMEOUT_S = float(os.environ.get("TRIPWISE_REQUEST_TIMEOUT", "30"))
# Used to estimate leg duration when OSRM is unavailable
FALLBACK_SPEED_KMH = float(os.environ.get("TRIPWISE_FALLBACK_SPEED_KMH", "40"))

# Nominatim requires an identifying user agent
GEOCODER_USER_AGENT = os.environ.get("TRIPWISE_USER_AGENT", "tripwise_app")

DATABASE_PATH = os.environ.get("TRIPWISE_DATABASE", "currentDatabase.txt")

LOG_LEVEL = os.environ.get("TRIPWISE_LOG_LEVEL", "INFO").upper()

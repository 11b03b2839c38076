"""
Prefect flows for the hatchcast pipeline.

Flows:
- refresh: Rank every monitored stream and write derived/top_picks.json

Usage (local):
    python -m hatchcast.flows.refresh

Usage (Prefect):
    prefect server start  # Optional, for dashboard
    prefect deployment run 'refresh-top-picks/default'
"""

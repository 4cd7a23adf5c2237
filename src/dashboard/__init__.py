"""
Data reconciliation layer for the agricultural telemetry dashboard.

Modules:
    config       — Environment-driven settings
    storage      — File-backed key/value storage and cross-process watcher
    preferences  — Persisted location/language preferences
    client       — HTTP client for the all-data endpoint
    orchestrator — Fetch lifecycle and raw payload cache
    listener     — Re-triggers fetches when preferences change
    resolver     — Canonical -> legacy -> default field resolution
    projectors   — Page-specific views projected from the raw payload
    service      — Wires the above into one owned service object
    chatbot      — Client for the chatbot endpoint
"""

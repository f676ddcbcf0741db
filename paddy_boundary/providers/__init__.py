"""Persistence and geolocation adapters.

- base: ``BoundaryStore`` and ``GeolocationProvider`` ports
- memory: in-process store
- blob_store: Azure Blob Storage store
- factory: store selection by configured name
- geolocation: location sources and map-centre fallback
"""

"""Record store, domain types and server configuration for a multimodal retrieval vault."""

__version__ = "0.1.0"
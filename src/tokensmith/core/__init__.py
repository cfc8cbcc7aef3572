"""Core model, adapter, and configuration for tokensmith."""

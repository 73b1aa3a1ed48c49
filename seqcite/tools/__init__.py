"""Validation tools: archive validators, registry and the check service."""

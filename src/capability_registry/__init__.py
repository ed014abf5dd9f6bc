"""Capability registry: discovers, validates and serves capability implementations."""

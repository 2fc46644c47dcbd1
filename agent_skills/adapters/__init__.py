"""Integrations of loaded skills with agent frameworks."""

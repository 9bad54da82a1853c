"""Ports (abstract interfaces) implemented by the infrastructure layer."""

"""Clients for the services the gateway depends on."""

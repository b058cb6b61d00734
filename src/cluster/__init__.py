"""Cluster-level version planning."""

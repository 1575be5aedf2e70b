"""Logging and fan-out helpers shared by the DevOps event Lambda."""

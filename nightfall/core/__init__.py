"""Core Nightfall client modules."""

"""Service layer for NexusClient."""

"""NexusClient - asset installation and update tracking for Parkitect."""

__version__ = "0.1.0"

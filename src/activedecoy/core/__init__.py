"""Core types, collaborator contracts, clocks and configuration."""

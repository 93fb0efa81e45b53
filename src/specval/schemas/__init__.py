"""Data contracts: conditions, specifications, result value objects and configuration models."""

"""Orchestration layer: context, exceptions and the conversion pipeline."""

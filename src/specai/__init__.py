"""SpecAI: spec-driven, human-approved document workflow."""

__version__ = "0.1.0"

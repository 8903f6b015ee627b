"""Core domain: models, parser, encoders and ports."""

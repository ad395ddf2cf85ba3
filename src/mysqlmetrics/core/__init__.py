"""Metric derivation core: models, ports, parsers and scrapers."""

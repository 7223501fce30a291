"""
Trending ranking engine.

Responsibilities:
- Resolve canonical engagement signals on caller-supplied records.
- Score each record with a weighted linear formula minus a capped age penalty.
- Filter, stable-sort, truncate and project the scored records.
- Merge defaults, named presets and caller overrides into one config.
"""

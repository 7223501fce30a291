"""
Named ranking presets.

Responsibilities:
- Hold read-only partial configs for common ranking use cases.
- Derive industry templates from business scenarios.
- Blend scenarios and build urgency / market-size overrides.
"""

"""Building blocks for an NTRIP caster: bit fields, HTTP auth, GELF records,
endpoints, IP prefix quotas, auth files, configuration and static files."""

__version__ = "0.8.0"
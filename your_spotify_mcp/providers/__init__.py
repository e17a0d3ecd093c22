"""Concrete upstream clients implementing :class:`IUpstreamClient`."""

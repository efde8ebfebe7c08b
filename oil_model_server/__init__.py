"""Oil company model server: authenticated HTTP front end for the simulation engine."""

__version__ = "2.0.0"

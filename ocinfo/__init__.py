"""oc-info — inspect the components published in an OpenComponents registry."""

__version__ = "0.3.0"

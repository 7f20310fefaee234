"""Registry access — listing components and fetching their ``~info`` metadata.

The registry package provides:
- Models: registry documents, component metadata and author fields
- Client: the root listing request and the concurrent metadata fan-out
"""

from ocinfo.registry.models import REGISTRY_TYPE, AggregationKey, ComponentMetadata

__all__ = ["REGISTRY_TYPE", "AggregationKey", "ComponentMetadata"]

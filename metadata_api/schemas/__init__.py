from metadata_api.schemas.metadata import MetadataRead, SingleMetadataRead

__all__ = [
    "MetadataRead",
    "SingleMetadataRead",
]

"""intl-extract data schema: message descriptors and catalog serialization."""

from intl_extract.schema.models import (
    MessageDescriptor,
    Position,
    dump_catalog,
    load_catalog,
)

__all__ = ["MessageDescriptor", "Position", "dump_catalog", "load_catalog"]

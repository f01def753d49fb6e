"""Extension-preserving JSON codec public surface.

Exports the extension store, the known-field resolver, the codec functions,
and the :class:`ExtensibleModel` base used by every wire record.
"""

from .extensions import ExtensionStore, merge_extensions, split_extensions
from .known_fields import resolve_known_fields
from .json_codec import (
    decode_array_with_extensions,
    decode_mapping_with_extensions,
    decode_with_extensions,
    encode_array_with_extensions,
    encode_with_extensions,
)
from .extensible_model import ExtensibleModel

__all__ = [
    "ExtensionStore",
    "ExtensibleModel",
    "decode_array_with_extensions",
    "decode_mapping_with_extensions",
    "decode_with_extensions",
    "encode_array_with_extensions",
    "encode_with_extensions",
    "merge_extensions",
    "resolve_known_fields",
    "split_extensions",
]

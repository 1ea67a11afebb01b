"""Format codecs for fastserial (registered in dispatch order on import)."""

from .json_codec import JSONCodec
from .plist_codec import PlistCodec

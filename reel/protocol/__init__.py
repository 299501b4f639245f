from reel.protocol.channel import Channel, ChannelClosed
from reel.protocol.invocation import (
    decode_value,
    encode_arguments,
    encode_value,
    invoke,
)

__all__ = [
    "Channel", "ChannelClosed",
    "encode_value", "encode_arguments", "decode_value", "invoke",
]

from .hub import ChannelHub

__all__ = ["ChannelHub"]

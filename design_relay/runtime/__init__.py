"""Runtime package.

Keep this module dependency-light: the command client and tool server import
`design_relay.runtime.*` without pulling in the relay's web stack.
"""

__all__: list[str] = []

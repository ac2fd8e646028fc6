"""
Toolkit bindings.
"""
from .base import Backend, DisplayDevice
from .headless import HeadlessBackend, HeadlessDevice, HeadlessSurface
from .pygame_backend import PygameBackend, PygameDisplayDevice, PygameSurface

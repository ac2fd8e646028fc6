"""
Pictures and the view transform used to draw them.
"""
from .picture import Blank, Circle, Group, Line, Picture, Rect, Text
from .view import ViewTransform, clamp_zoom

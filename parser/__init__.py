from .html_parser import HTMLDocument, TextSlot

__all__ = ["HTMLDocument", "TextSlot"]

"""Document readers producing node trees."""

from .json_reader import JsonReader
from .xml_reader import XmlReader

__all__ = ["JsonReader", "XmlReader"]

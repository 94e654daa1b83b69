"""
Inkstamp PDF: stamp text, shapes, signatures and images onto PDF pages.
"""
from inkstamp.config import Config

__version__ = Config.APP_VERSION

__title__ = "rfcurl"
__description__ = "A strict RFC 3986 URL reference parser."
__version__ = "0.1.0"

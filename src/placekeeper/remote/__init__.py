"""Remote subpackage.

- refresher: periodic fetch of the palette/template/origin document
"""
from .refresher import ConfigRefresher

__all__ = ["ConfigRefresher"]
